import socket


class ConnectionClosed(OSError):
    """The peer closed the stream before the requested bytes arrived."""


class RobustIO:
    """
    Buffered reads and complete writes on top of a connected socket.

    recv() and send() may transfer fewer bytes than asked for; every method
    here loops until the request is satisfied or the stream ends. Whatever
    recv() returned beyond the current request stays in the buffer and is
    served to the next call first.
    """

    def __init__(self, conn: socket.socket, bufsize: int = 8192) -> None:
        self.conn = conn
        self.bufsize = bufsize
        self._buf = bytearray()
        self._eof = False

    def _fill(self) -> bool:
        if self._eof:
            return False
        chunk = self.conn.recv(self.bufsize)
        if chunk == b"":
            self._eof = True
            return False
        self._buf.extend(chunk)
        return True

    def readline(self, maxlen: int = 8192) -> bytes:
        """Return the next line with its terminator, or b"" at end of stream."""
        while True:
            idx = self._buf.find(b"\n", 0, maxlen)
            if idx >= 0:
                return self._take(idx + 1)
            if len(self._buf) >= maxlen:
                return self._take(maxlen)
            if not self._fill():
                return self._take(len(self._buf))

    def readn(self, n: int) -> bytes:
        while len(self._buf) < n:
            if not self._fill():
                raise ConnectionClosed(f"expected {n} bytes, stream ended after {len(self._buf)}")
        return self._take(n)

    def writen(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            sent = self.conn.send(view)
            view = view[sent:]

    def fileno(self) -> int:
        return self.conn.fileno()

    def _take(self, n: int) -> bytes:
        data = bytes(self._buf[:n])
        del self._buf[:n]
        return data
