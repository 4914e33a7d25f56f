from dataclasses import dataclass

@dataclass(frozen=True)
class Config:
    host: str = "0.0.0.0"
    port: int = 8080
    root: str = "."
    dynamic_marker: str = "cgi-bin"
    default_document: str = "home.html"
    server_name: str = "Tiny Web Server"
    backlog: int = 128
    accept_timeout: float = 1.0
    max_line: int = 8192
    chunk_size: int = 64 * 1024
    debug: bool = False
