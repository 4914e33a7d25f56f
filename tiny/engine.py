import logging
import socket
from typing import Optional

from .config import Config
from .errors import HTTPError, MethodNotImplemented
from .handler import DynamicHandler, StaticHandler
from .models import DynamicTarget, ResponseSpec
from .parser import parse_request_line, parse_uri, read_request_headers
from .resolver import resolve
from .rio import RobustIO

logger = logging.getLogger(__name__)


class Engine:
    def handle_connection(self, conn: socket.socket) -> None:
        try:
            self.process(conn)
        finally:
            try:
                conn.close()
            except OSError:
                pass

    def process(self, conn: socket.socket) -> Optional[ResponseSpec]:
        raise NotImplementedError


class HTTPEngine(Engine):
    def __init__(self, config: Config, static_handler=None, dynamic_handler=None) -> None:
        self.config = config
        self.static_handler = static_handler or StaticHandler(config)
        self.dynamic_handler = dynamic_handler or DynamicHandler(config)

    def process(self, conn: socket.socket) -> Optional[ResponseSpec]:
        """Run exactly one request/response transaction on conn."""
        rio = RobustIO(conn)
        try:
            line = rio.readline(self.config.max_line)
            if not line:
                return None
            logger.info("%s", line.decode("iso-8859-1").rstrip())
            resp = self._dispatch(rio, line)
        except HTTPError as e:
            return self.client_error(rio, e.cause, e.code, e.short_message, e.long_message)
        except OSError as e:
            logger.warning("transaction aborted: %s", e)
            return None

        logger.info("-> %d %s", resp.status, resp.reason)
        return resp

    def _dispatch(self, rio: RobustIO, line: bytes) -> ResponseSpec:
        req = parse_request_line(line)
        if not req.is_get():
            raise MethodNotImplemented(req.method)
        read_request_headers(rio, self.config.max_line)

        target = parse_uri(req.target, self.config.root, self.config.dynamic_marker,
                           self.config.default_document)
        meta = resolve(target)
        if isinstance(target, DynamicTarget):
            return self.dynamic_handler.serve(rio, target)
        return self.static_handler.serve(rio, target, meta)

    def client_error(self, rio: RobustIO, cause: str, code: int, short_message: str,
                     long_message: str) -> ResponseSpec:
        body = (
            "<html><title>Tiny Error</title>"
            '<body bgcolor="ffffff">\r\n'
            f"{code}: {short_message}\r\n"
            f"<p>{long_message}: {cause}\r\n"
            "<hr><em>The Tiny Web server</em>\r\n"
        ).encode("utf-8", errors="surrogateescape")
        resp = ResponseSpec(
            code,
            short_message,
            headers={"Content-type": "text/html", "Content-length": str(len(body))},
            body_size=len(body),
        )
        try:
            rio.writen(resp.head() + b"\r\n" + body)
        except OSError as e:
            logger.warning("could not send %d to client: %s", code, e)
        else:
            logger.info("-> %d %s (%s)", code, short_message, cause)
        return resp
