import logging
import socket
import threading
from typing import Optional, Tuple

from .config import Config
from .engine import Engine, HTTPEngine

logger = logging.getLogger(__name__)


class IterativeHTTPServer:
    """Accepts and fully services one connection at a time."""

    def __init__(self, config: Config, engine: Optional[Engine] = None) -> None:
        self.config = config
        self.engine = engine or HTTPEngine(config)

        # Created on run()
        self._listen_sock: Optional[socket.socket] = None

        self._stop_event = threading.Event()
        self._ready = threading.Event()

    @property
    def server_address(self) -> Optional[Tuple[str, int]]:
        if self._listen_sock is None:
            return None
        return self._listen_sock.getsockname()[:2]

    def wait_ready(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)

    def run(self) -> None:
        self._stop_event.clear()
        self._listen_sock = self._create_listen_socket()
        host, port = self.server_address
        logger.info("Tiny listening on %s:%d, serving '%s'", host, port, self.config.root)
        self._ready.set()
        try:
            self._accept_loop()
        finally:
            self._cleanup()

    def stop(self) -> None:
        self._stop_event.set()

    def _cleanup(self) -> None:
        self._ready.clear()
        if self._listen_sock is not None:
            try:
                self._listen_sock.close()
            except OSError:
                pass
        self._listen_sock = None

    def _create_listen_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        sock.bind((self.config.host, self.config.port))
        sock.listen(self.config.backlog)

        # Lets the loop notice stop() between connections.
        sock.settimeout(self.config.accept_timeout)

        return sock

    def _accept_loop(self) -> None:
        assert self._listen_sock is not None

        while not self._stop_event.is_set():
            try:
                conn, addr = self._listen_sock.accept()
            except socket.timeout:
                continue
            except OSError:
                break

            # Transactions run without a timeout.
            conn.settimeout(None)
            logger.info("Accepted connection from %s:%d", addr[0], addr[1])
            self.engine.handle_connection(conn)
