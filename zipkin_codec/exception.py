class ZipkinError(Exception):
    """Custom error to be raised on Zipkin exceptions."""


class ParseError(ZipkinError):
    """The payload is not valid JSON or doesn't look like a list of spans."""


class FormatError(ZipkinError):
    """A hex identifier is malformed or longer than allowed."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value
