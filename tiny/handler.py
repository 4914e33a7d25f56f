import logging
import os
import subprocess
from typing import Mapping, Optional

from .config import Config
from .models import DynamicTarget, ResourceMetadata, ResponseSpec, StaticTarget
from .rio import RobustIO

logger = logging.getLogger(__name__)


class FileShrunk(OSError):
    """The file ended before the size announced in Content-length was sent."""


# Checked in order, first match wins.
CONTENT_TYPES = (
    (".html", "text/html"),
    (".gif", "image/gif"),
    (".png", "image/png"),
    (".jpg", "image/jpeg"),
)
DEFAULT_CONTENT_TYPE = "text/plain"


def get_filetype(path: str) -> str:
    for suffix, ctype in CONTENT_TYPES:
        if path.endswith(suffix):
            return ctype
    return DEFAULT_CONTENT_TYPE


class StaticHandler:
    def __init__(self, config: Config) -> None:
        self.config = config

    def serve(self, rio: RobustIO, target: StaticTarget, meta: ResourceMetadata) -> ResponseSpec:
        resp = ResponseSpec(
            200,
            "OK",
            headers={
                "Server": self.config.server_name,
                "Connection": "close",
                "Content-length": str(meta.size),
                "Content-type": get_filetype(target.path),
            },
            body_path=target.path,
            body_size=meta.size,
        )
        rio.writen(resp.head() + b"\r\n")
        self._send_file(rio, target.path, meta.size)
        return resp

    def _send_file(self, rio: RobustIO, path: str, size: int) -> None:
        # Content-length was taken from the earlier stat, so send exactly that many bytes.
        remaining = size
        with open(path, "rb") as f:
            while remaining > 0:
                data = f.read(min(self.config.chunk_size, remaining))
                if not data:
                    raise FileShrunk(f"{path} shrank by {remaining} bytes while being sent")
                rio.writen(data)
                remaining -= len(data)


class DynamicHandler:
    def __init__(self, config: Config, base_env: Optional[Mapping[str, str]] = None) -> None:
        self.config = config
        self.base_env = base_env

    def serve(self, rio: RobustIO, target: DynamicTarget) -> ResponseSpec:
        resp = ResponseSpec(200, "OK", headers={"Server": self.config.server_name})
        rio.writen(resp.head())
        self.run_program(target.path, target.query, rio.fileno())
        return resp

    def run_program(self, path: str, query: str, out_fd: int) -> int:
        """
        Run the CGI program with its stdout bound to out_fd and wait for it.
        The program writes the rest of the response, headers included.
        """
        env = dict(os.environ if self.base_env is None else self.base_env)
        env["QUERY_STRING"] = query
        try:
            proc = subprocess.run([path], env=env, stdin=subprocess.DEVNULL, stdout=out_fd, check=False)
        except ValueError as e:
            # NUL bytes in the path or QUERY_STRING cannot reach exec().
            raise OSError(f"cannot run {path}: {e}") from e
        logger.debug("%s exited with status %d", path, proc.returncode)
        return proc.returncode
