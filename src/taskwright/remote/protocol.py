# src/taskwright/remote/protocol.py

"""
Remote command wire format.

One websocket text message per request: "r::" + shell command.
One text message per reply: "0" (command succeeded) or "1" (failed).
"""

from __future__ import annotations

RUN_PREFIX = "r::"

REPLY_OK = 0
REPLY_FAILED = 1


def encode_request(command: str) -> str:
    return f"{RUN_PREFIX}{command}"


def decode_request(message: str) -> str | None:
    """Return the command carried by a run request, or None for anything else."""
    if not message.startswith(RUN_PREFIX):
        return None
    return message[len(RUN_PREFIX):]


def encode_reply(ok: bool) -> str:
    return str(REPLY_OK if ok else REPLY_FAILED)


def parse_reply(raw: str) -> int:
    # Anything unreadable counts as a failure.
    try:
        return int(raw.strip())
    except ValueError:
        return REPLY_FAILED
