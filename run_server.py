#!/usr/bin/env python3
"""Server startup script"""

import uvicorn
import asyncio
import logging
import socket
import sys
from typing import Optional

from config import Settings, settings, validate_settings
from main import create_app

logger = logging.getLogger(__name__)


class StartupError(Exception):
    """The listener could not be bound or the server could not be configured"""


def bind_listener(host: str, port: int) -> socket.socket:
    """Create a TCP socket listening on host:port; the socket is closed if binding fails"""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family=family, type=socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        # SO_REUSEADDR lets a second socket bind until one of them listens
        sock.listen()
    except OSError as e:
        sock.close()
        raise StartupError(f"could not bind {host}:{port}: {e}") from e
    sock.set_inheritable(True)
    return sock


class StaticFileServer:
    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings
        self.app = create_app(self.config)
        self.server: Optional[uvicorn.Server] = None
        self.port: Optional[int] = None

    @property
    def started(self) -> bool:
        return self.server is not None and self.server.started

    async def start(self) -> bool:
        """Bind the listener and serve until stopped.

        Returns False when the listener could not be started. The error is
        logged and not raised.
        """
        try:
            try:
                validate_settings(self.config)
            except ValueError as e:
                raise StartupError(str(e)) from e
            sock = bind_listener(self.config.host, self.config.port)
        except StartupError as e:
            logger.error(f"Server failed to start: {e}")
            return False

        try:
            self.port = sock.getsockname()[1]
            logger.info(f"server listening on {self.port}")

            self.server = uvicorn.Server(uvicorn.Config(
                self.app,
                log_config=None,
                log_level=self.config.log_level,
                access_log=False
            ))
            await self.server.serve(sockets=[sock])
        finally:
            sock.close()

        return True

    def stop(self):
        """Ask a running server to finish its serving loop"""
        if self.server is not None:
            self.server.should_exit = True


async def start(config: Optional[Settings] = None) -> bool:
    """Start the static asset server with the given (or global) settings"""
    return await StaticFileServer(config).start()


def main():
    """Start the server"""
    try:
        started = asyncio.run(start())
    except KeyboardInterrupt:
        logger.info("Server stopped")
        started = True

    if not started:
        sys.exit(1)


if __name__ == "__main__":
    main()
