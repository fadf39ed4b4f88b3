# src/taskwright/remote/server.py

"""
Remote command server.

Accepts websocket connections and, for every "r::<command>" text message,
runs the command locally and replies "0" or "1". Other messages are ignored.

Each request runs in a worker thread, so requests arriving together are
not serialized (their output may interleave on the inherited stdio).
"""

from __future__ import annotations

import asyncio
import logging

from aiohttp import WSMsgType, web

from ..config import DEFAULT_REMOTE_PORT
from ..core.diagnostics import Diagnostics
from ..tools.shell import run_command
from .protocol import decode_request, encode_reply

logger = logging.getLogger(__name__)


class RemoteCommandServer:
    def __init__(self, diag: Diagnostics, *, host: str = "0.0.0.0", port: int = DEFAULT_REMOTE_PORT) -> None:
        self.diag = diag
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/", self._handle_ws)
        return app

    async def _run_and_reply(self, ws: web.WebSocketResponse, command: str) -> None:
        ok = await asyncio.to_thread(run_command, self.diag, command, True)
        if ws.closed:
            logger.debug("Client went away before reply for %r", command)
            return
        await ws.send_str(encode_reply(ok))

    async def _handle_ws(self, request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        logger.debug("Connection from %s", request.remote)

        pending: set[asyncio.Task[None]] = set()
        async for msg in ws:
            if msg.type == WSMsgType.TEXT:
                command = decode_request(msg.data)
                if command is None:
                    logger.debug("Ignoring message without run prefix: %r", msg.data)
                    continue
                job = asyncio.create_task(self._run_and_reply(ws, command))
                pending.add(job)
                job.add_done_callback(pending.discard)
            elif msg.type == WSMsgType.ERROR:
                logger.warning("Connection closed with exception %s", ws.exception())

        if pending:
            await asyncio.gather(*pending)
        return ws

    async def start(self) -> int:
        """Bind and start listening. Returns the bound port."""
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()

        # port=0 binds an ephemeral port; report the real one.
        for addr in self._runner.addresses:
            if isinstance(addr, tuple) and len(addr) >= 2:
                self.port = addr[1]
                break

        self.diag.verbose(f"Server started on port :{self.port}")
        return self.port

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None

    async def serve_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        finally:
            await self.stop()


def listen(diag: Diagnostics, port: int = DEFAULT_REMOTE_PORT, host: str = "0.0.0.0") -> None:
    """Run the remote command server until interrupted."""
    server = RemoteCommandServer(diag, host=host, port=port)
    try:
        asyncio.run(server.serve_forever())
    except KeyboardInterrupt:
        logger.info("Remote command server stopped.")
