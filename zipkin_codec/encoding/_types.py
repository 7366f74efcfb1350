import datetime
from enum import Enum
from typing import List
from typing import Optional

from typing_extensions import Protocol


class Encoding(Enum):
    """Supported input encodings."""

    V1_THRIFT = "V1_THRIFT"
    V1_JSON = "V1_JSON"


class Endpoint(Protocol):
    """Network context of an annotation."""

    def host(self) -> str:
        ...

    def name(self) -> str:
        ...


class Annotation(Protocol):
    """Timestamped event recorded on a span."""

    def timestamp(self) -> datetime.datetime:
        ...

    def value(self) -> str:
        ...

    def host(self) -> Optional[Endpoint]:
        ...


class BinaryAnnotation(Protocol):
    """Key/value tag recorded on a span."""

    def key(self) -> str:
        ...

    def value(self) -> str:
        ...

    def host(self) -> Optional[Endpoint]:
        ...


class Span(Protocol):
    """Wire-format independent view of a decoded span.

    Identifier accessors are evaluated lazily and may raise FormatError;
    a bad id only affects the accessor that reads it.
    """

    def trace(self) -> str:
        ...

    def span_id(self) -> str:
        ...

    def parent(self) -> str:
        ...

    def name(self) -> str:
        ...

    def timestamp(self) -> datetime.datetime:
        ...

    def duration(self) -> datetime.timedelta:
        ...

    def is_debug(self) -> bool:
        ...

    def annotations(self) -> List[Annotation]:
        ...

    def binary_annotations(self) -> List[BinaryAnnotation]:
        ...
