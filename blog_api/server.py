"""
Blog API: Process Lifecycle (Start / Stop)
============================================

What:  Starts and stops a complete Blog API process: store connection plus
       HTTP listener.
How:   `run_server()` connects the Database, binds the listening socket, and
       runs uvicorn on that socket in a background task; it returns a
       `ServerHandle` once uvicorn reports it is serving. `close_server()`
       takes that handle and tears everything down.
Who:   Used by the `blog-api` console script and by test harnesses that need
       a real listening server.

Start sequence:
    1. Database.connect()            (failure → nothing to release, re-raise)
    2. bind socket to host:port      (failure → Database.disconnect(), re-raise)
    3. uvicorn serve on that socket  (failure → close socket, disconnect, re-raise)

Stop sequence:
    1. Database.disconnect()
    2. uvicorn shutdown, await the serving task
    Both steps always run; the first error is re-raised afterwards.
"""

import asyncio
import logging
import socket
from dataclasses import dataclass
from typing import Optional

import uvicorn
from fastapi import FastAPI

from blog_api.config import settings
from blog_api.database import Database
from blog_api.main import create_app, setup_logging

logger = logging.getLogger(__name__)

# Polling interval while waiting for uvicorn to report it is serving
STARTUP_POLL_INTERVAL = 0.01


@dataclass
class ServerHandle:
    """Everything `close_server()` needs to shut a running instance down."""
    app: FastAPI
    database: Database
    server: uvicorn.Server
    task: "asyncio.Task[None]"
    sock: socket.socket
    host: str
    port: int

    @property
    def base_url(self) -> str:
        host = "127.0.0.1" if self.host in ("0.0.0.0", "") else self.host
        return f"http://{host}:{self.port}"


def _bind_socket(host: str, port: int) -> socket.socket:
    """Bind a TCP socket; uvicorn puts it into listening mode. Port 0 picks a free port."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


async def run_server(
    database_url: Optional[str] = None,
    port: Optional[int] = None,
    host: Optional[str] = None,
) -> ServerHandle:
    """
    Connect to the store, then start the HTTP listener.

    Args:
        database_url: Async SQLAlchemy URL (default: settings.database_url)
        port:         Port to listen on; 0 picks a free one (default: settings.backend_port)
        host:         Interface to bind (default: settings.backend_host)

    Returns:
        ServerHandle for close_server(); `handle.port` is the bound port.

    Raises:
        Whatever the store driver raises when the connection fails, OSError
        when the port cannot be bound, RuntimeError when uvicorn fails to
        start. In every case the store connection is released first.
    """
    database_url = database_url or settings.database_url
    port = settings.backend_port if port is None else port
    host = host or settings.backend_host

    database = Database(database_url)
    await database.connect()

    try:
        sock = _bind_socket(host, port)
    except OSError as e:
        logger.error("Could not bind %s:%d: %s", host, port, e)
        await database.disconnect()
        raise

    bound_port = sock.getsockname()[1]
    app = create_app(database)
    config = uvicorn.Config(
        app,
        host=host,
        port=bound_port,
        log_config=None,
        access_log=False,
        lifespan="on",
    )
    server = uvicorn.Server(config)
    task = asyncio.create_task(server.serve(sockets=[sock]))

    while not server.started:
        if task.done():
            sock.close()
            await database.disconnect()
            error = task.exception()
            if error is not None:
                raise error
            raise RuntimeError(f"HTTP listener on {host}:{bound_port} failed to start")
        await asyncio.sleep(STARTUP_POLL_INTERVAL)

    logger.info("Your app is listening on port %d", bound_port)
    return ServerHandle(
        app=app,
        database=database,
        server=server,
        task=task,
        sock=sock,
        host=host,
        port=bound_port,
    )


async def close_server(handle: ServerHandle) -> None:
    """
    Disconnect the store, then close the HTTP listener.

    Safe to call more than once. Both steps run even if the first fails;
    the first error encountered is re-raised.
    """
    first_error: Optional[BaseException] = None

    try:
        await handle.database.disconnect()
    except Exception as e:
        logger.error("Error disconnecting from the store: %s", e)
        first_error = e

    logger.info("Closing server")
    try:
        handle.server.should_exit = True
        await handle.task
    except Exception as e:
        logger.error("Error closing the HTTP listener: %s", e)
        if first_error is None:
            first_error = e

    if first_error is not None:
        raise first_error


async def _serve_until_stopped() -> None:
    handle = await run_server()
    try:
        # uvicorn sets should_exit on SIGINT/SIGTERM, which ends the task
        await handle.task
    finally:
        await close_server(handle)


def main() -> None:
    """Console entry point: serve with settings from the environment until interrupted."""
    setup_logging()
    try:
        asyncio.run(_serve_until_stopped())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
