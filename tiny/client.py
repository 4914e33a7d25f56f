import socket
from typing import Iterable, Iterator

from .rio import RobustIO


class EchoClient:
    """Sends lines to an echo server and reads each one back."""

    def __init__(self, host: str, port: int, max_line: int = 8192) -> None:
        self.host = host
        self.port = port
        self.max_line = max_line

    def echo(self, lines: Iterable[bytes]) -> Iterator[bytes]:
        with socket.create_connection((self.host, self.port)) as conn:
            rio = RobustIO(conn)
            for line in lines:
                rio.writen(line)
                reply = rio.readline(self.max_line)
                if not reply:
                    return
                yield reply
