from dataclasses import dataclass, field
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class Request:
    method: str
    target: str
    version: str

    def is_get(self) -> bool:
        return self.method.upper() == "GET"


@dataclass(frozen=True)
class StaticTarget:
    path: str


@dataclass(frozen=True)
class DynamicTarget:
    path: str
    query: str = ""


Target = Union[StaticTarget, DynamicTarget]


@dataclass(frozen=True)
class ResourceMetadata:
    path: str
    exists: bool
    is_regular: bool = False
    owner_readable: bool = False
    owner_executable: bool = False
    size: int = 0


@dataclass(frozen=True)
class ResponseSpec:
    status: int
    reason: str
    version: str = "HTTP/1.0"
    headers: Dict[str, str] = field(default_factory=dict)
    body_path: Optional[str] = None
    body_size: int = 0

    def head(self) -> bytes:
        lines = [f"{self.version} {self.status} {self.reason}\r\n"]
        lines.extend(f"{k}: {v}\r\n" for k, v in self.headers.items())
        return "".join(lines).encode("iso-8859-1")
