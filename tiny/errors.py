class HTTPError(Exception):
    """An error that is reported to the client as an HTML error page."""

    code = 500
    short_message = "Internal Server Error"
    long_message = "Tiny hit an unexpected error"

    def __init__(self, cause: str, long_message: str | None = None) -> None:
        self.cause = cause
        if long_message is not None:
            self.long_message = long_message
        super().__init__(f"{self.code} {self.short_message}: {cause}")


class BadRequest(HTTPError):
    code = 400
    short_message = "Bad Request"
    long_message = "Tiny couldn't parse the request line"


class Forbidden(HTTPError):
    code = 403
    short_message = "Forbidden"
    long_message = "Tiny couldn't read the file"


class NotFound(HTTPError):
    code = 404
    short_message = "Not found"
    long_message = "Tiny couldn't find this file"


class MethodNotImplemented(HTTPError):
    code = 501
    short_message = "Not Implemented"
    long_message = "Tiny does not implement this method"
