"""Best-effort log notifications to a connected MCP host.

Messages are handed to a background task on the running event loop and
delivered in call order. Nothing here ever raises into the caller: with no
host bound a message is dropped, and a failed delivery is discarded.
"""

import asyncio
import contextlib
import logging
import threading
from typing import Any, Literal, Protocol

from mcp.types import LoggingLevel

from ace_uploader.constants import MCP_LOG_QUEUE_SIZE

logger = logging.getLogger(__name__)

LogLevel = Literal["debug", "info", "warning", "error"]


class LogHost(Protocol):
    """Anything that can deliver MCP log notifications.

    `mcp.server.session.ServerSession` satisfies this protocol.
    """

    async def send_log_message(self, level: LoggingLevel, data: Any) -> None: ...


class NotificationChannel:
    """Forwards leveled log messages to the currently bound MCP host.

    Delivery runs on a single event loop: the one `bind` was called from,
    or else the first one `send` is called from. Sends from other threads
    are handed over to that loop.
    """

    def __init__(self, max_queue_size: int = MCP_LOG_QUEUE_SIZE) -> None:
        self.max_queue_size = max_queue_size
        self._host: LogHost | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._lock = threading.Lock()
        self._queue: asyncio.Queue[tuple[LogHost, LogLevel, str]] | None = None
        self._worker: asyncio.Task[None] | None = None

    @property
    def host(self) -> LogHost | None:
        return self._host

    def bind(self, host: LogHost) -> None:
        """Attach `host`, replacing any previously bound one."""
        running = _running_loop()
        with self._lock:
            self._host = host
            if running is not None:
                self._loop = running
        logger.debug("MCP log host bound: %r", host)

    def send(self, level: LogLevel, message: str) -> None:
        """Queue `message` for delivery to the bound host.

        Returns immediately. The message is dropped when no host is bound,
        when there is no open event loop to deliver on or when the queue
        is full.
        """
        running = _running_loop()
        with self._lock:
            host = self._host
            if host is None:
                return
            # the delivery loop is replaced only once it is closed
            if self._loop is None or self._loop.is_closed():
                self._loop = running
            loop = self._loop
        if loop is None:
            return

        item = (host, level, message)
        if loop is running:
            self._enqueue(item)
        else:
            # loop closed in the meantime
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(self._enqueue, item)

    def _enqueue(self, item: tuple[LogHost, LogLevel, str]) -> None:
        """Put `item` on the queue, starting the delivery task if needed.

        Always runs on the delivery loop.
        """
        loop = asyncio.get_running_loop()
        if (
            self._queue is None
            or self._worker is None
            or self._worker.done()
            or self._worker.get_loop() is not loop
        ):
            self._queue = asyncio.Queue(maxsize=self.max_queue_size)
            self._worker = loop.create_task(self._deliver(self._queue))
        with contextlib.suppress(asyncio.QueueFull):
            self._queue.put_nowait(item)

    async def _deliver(
        self, queue: asyncio.Queue[tuple[LogHost, LogLevel, str]]
    ) -> None:
        while True:
            host, level, message = await queue.get()
            # host not connected or transport failed, the message is lost
            with contextlib.suppress(Exception):
                await host.send_log_message(level=level, data=message)
            queue.task_done()

    async def aclose(self) -> None:
        """Deliver the queued messages and stop the delivery task."""
        # let hand-overs from other threads reach the queue first
        await asyncio.sleep(0)
        worker, queue = self._worker, self._queue
        if worker is None or queue is None:
            return
        if worker.get_loop() is not asyncio.get_running_loop():
            return
        self._worker = self._queue = None

        if not worker.done():
            await queue.join()
        worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await worker


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def mcp_level(levelno: int) -> LogLevel:
    """Map a stdlib logging level number to an MCP log level."""
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warning"
    if levelno >= logging.INFO:
        return "info"
    return "debug"


class McpLogHandler(logging.Handler):
    """Logging handler forwarding records to a `NotificationChannel`."""

    def __init__(self, channel: NotificationChannel, level: int = logging.NOTSET):
        super().__init__(level)
        self.channel = channel

    def emit(self, record: logging.LogRecord) -> None:
        # records about the channel itself stay local
        if record.name == __name__:
            return
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.channel.send(mcp_level(record.levelno), message)


# Process-wide channel used by the uploader
channel = NotificationChannel()


def init_mcp_logger(host: LogHost) -> None:
    """Bind the process-wide channel to `host`."""
    channel.bind(host)


def send_mcp_log(level: LogLevel, message: str) -> None:
    """Send a log message through the process-wide channel."""
    channel.send(level, message)


def install_mcp_log_handler(
    logger_name: str = "ace_uploader", target: NotificationChannel | None = None
) -> McpLogHandler:
    """Forward records of `logger_name` to `target` (the process-wide channel by default)."""
    handler = McpLogHandler(target if target is not None else channel)
    logging.getLogger(logger_name).addHandler(handler)
    return handler
