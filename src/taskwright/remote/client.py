# src/taskwright/remote/client.py

from __future__ import annotations

import asyncio
import logging

import aiohttp

from ..core.diagnostics import Diagnostics
from ..core.errors import ErrorKind
from ..tools.shell import run_command
from .protocol import REPLY_OK, encode_request, parse_reply

logger = logging.getLogger(__name__)


def dispatch(diag: Diagnostics, command: str, address: str | None = None, port: int | None = None) -> bool:
    """
    Run `command` on the remote command server, or locally when external
    commands are not allowed (the default).

    Returns True when the command succeeded. Blocks until the single reply
    arrives; there is no timeout.
    """
    state = diag.state
    if not state.allow_external:
        return run_command(diag, command)

    host = address or state.settings.remote_host
    return asyncio.run(send_command(diag, command, host, port or state.settings.remote_port))


async def send_command(diag: Diagnostics, command: str, host: str, port: int) -> bool:
    url = f"ws://{host}:{port}/"
    transport_error: BaseException | None = None

    try:
        async with aiohttp.ClientSession() as session:
            async with session.ws_connect(url) as ws:
                diag.verbose(f"excall {command}")
                await ws.send_str(encode_request(command))
                msg = await ws.receive()
                transport_error = ws.exception()
    except (aiohttp.ClientError, OSError) as e:
        # Transport failures are reported and swallowed.
        diag.error(f"\x1b[90m[\x1b[31m%\x1b[90m]\x1b[0m Failed to send: {e}")
        return False

    if msg.type == aiohttp.WSMsgType.ERROR:
        diag.fatal(f"Remote command connection error: {transport_error}", kind=ErrorKind.REMOTE)

    if msg.type != aiohttp.WSMsgType.TEXT:
        diag.error(f"\x1b[90m[\x1b[31m%\x1b[90m]\x1b[0m Failed to send: connection closed ({msg.type.name})")
        return False

    if parse_reply(msg.data) != REPLY_OK:
        diag.error(f'Failed to run command \x1b[32m"{command}"\x1b[0m')
        diag.error("\x1b[90m[\x1b[31m%\x1b[90m]\x1b[0m Failure")
        return False

    logger.debug("Remote command succeeded on %s: %s", url, command)
    return True
