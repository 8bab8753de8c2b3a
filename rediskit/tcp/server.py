"""TCP server loop that hands each connection to a handler."""

from __future__ import annotations

import signal
import socket
import threading
from abc import ABC, abstractmethod

from rediskit.lib import logger

_POLL_INTERVAL = 0.1
_STOP_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGHUP", "SIGQUIT", "SIGTERM", "SIGINT")
    if hasattr(signal, name)
)


class Handler(ABC):
    """Application logic served over TCP."""

    @abstractmethod
    def handle(self, conn: socket.socket) -> None:
        """Serve one accepted connection until it ends."""

    @abstractmethod
    def close(self) -> None:
        """Stop serving and close every connection."""


def _serve_one(handler: Handler, conn: socket.socket) -> None:
    try:
        handler.handle(conn)
    except Exception as exc:
        logger.error("handler err: %s", exc)


def listen_and_serve(
    listener: socket.socket, handler: Handler, close_event: threading.Event
) -> None:
    """Accept connections until ``close_event`` is set, then shut down and wait."""
    listener.settimeout(_POLL_INTERVAL)
    workers: list[threading.Thread] = []
    try:
        while not close_event.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError as exc:
                logger.error("accept err: %s", exc)
                break
            conn.settimeout(None)
            logger.info("accept link")
            worker = threading.Thread(target=_serve_one, args=(handler, conn), daemon=True)
            worker.start()
            workers = [w for w in workers if w.is_alive()]
            workers.append(worker)
    finally:
        if close_event.is_set():
            logger.info("shutting down...")
        listener.close()
        handler.close()
    for worker in workers:
        worker.join()


def listen_and_serve_with_signal(address: str, handler: Handler) -> None:
    """Bind ``host:port`` and serve until a hang-up, quit, terminate or interrupt signal."""
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"address {address!r} has no port")
    listener = socket.create_server((host, int(port)))
    close_event = threading.Event()
    previous = {}
    if threading.current_thread() is threading.main_thread():
        for sig in _STOP_SIGNALS:
            previous[sig] = signal.signal(sig, lambda *_: close_event.set())
    try:
        logger.info("bind: %s, start listening...", address)
        listen_and_serve(listener, handler, close_event)
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old if old is not None else signal.SIG_DFL)