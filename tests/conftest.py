import os
import socket

import pytest

from tiny.config import Config
from tiny.engine import HTTPEngine

CGI_ECHO = b"#!/bin/sh\nprintf 'Content-type: text/plain\\r\\n\\r\\n'\nprintf '%s' \"$QUERY_STRING\"\n"


def split_response(raw: bytes):
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode("iso-8859-1").split("\r\n")
    headers = {}
    for line in lines[1:]:
        k, _, v = line.partition(": ")
        headers[k] = v
    return lines[0], headers, body


def read_all(sock: socket.socket) -> bytes:
    chunks = []
    while True:
        data = sock.recv(4096)
        if not data:
            return b"".join(chunks)
        chunks.append(data)


@pytest.fixture
def root(tmp_path):
    (tmp_path / "home.html").write_bytes(b"hi")
    cgi = tmp_path / "cgi-bin"
    cgi.mkdir()
    adder = cgi / "adder"
    adder.write_bytes(CGI_ECHO)
    os.chmod(adder, 0o755)
    return tmp_path


@pytest.fixture
def config(root):
    return Config(root=str(root))


@pytest.fixture
def engine(config):
    return HTTPEngine(config)


@pytest.fixture
def transact(engine):
    """Send raw request bytes through one engine transaction and return the raw response."""
    def run(request: bytes) -> bytes:
        client, server = socket.socketpair()
        with client:
            client.sendall(request)
            client.shutdown(socket.SHUT_WR)
            engine.handle_connection(server)
            return read_all(client)
    return run
