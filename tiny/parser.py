import logging
import os

from .errors import BadRequest
from .models import DynamicTarget, Request, StaticTarget, Target
from .rio import ConnectionClosed, RobustIO

logger = logging.getLogger(__name__)


def parse_request_line(line: bytes) -> Request:
    # Split the raw bytes, then decode each token so os.stat and the CGI
    # environment get back exactly the bytes the client sent.
    parts = [os.fsdecode(part) for part in line.split()]
    if len(parts) < 3:
        raise BadRequest(os.fsdecode(line.strip()))
    method, target, version = parts[:3]
    return Request(method=method, target=target, version=version)


def read_request_headers(rio: RobustIO, max_line: int = 8192) -> int:
    """Consume header lines up to the blank line; nothing is kept."""
    count = 0
    while True:
        line = rio.readline(max_line)
        if line == b"":
            raise ConnectionClosed("stream ended inside request headers")
        if line in (b"\r\n", b"\n"):
            return count
        logger.debug("header: %s", line.decode("iso-8859-1").rstrip())
        count += 1


def parse_uri(target: str, root: str, marker: str = "cgi-bin", default_document: str = "home.html") -> Target:
    if marker not in target:
        path = root + target
        if target.endswith("/"):
            path += default_document
        return StaticTarget(path=path)

    program, _, query = target.partition("?")
    return DynamicTarget(path=root + program, query=query)
