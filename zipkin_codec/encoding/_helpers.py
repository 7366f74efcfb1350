import datetime
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Tuple

from zipkin_codec.encoding._types import Annotation
from zipkin_codec.encoding._types import BinaryAnnotation
from zipkin_codec.util import EPOCH
from zipkin_codec.util import id_from_hex
from zipkin_codec.util import micro_to_time
from zipkin_codec.util import trace_id_from_hex


DEFAULT_SERVICE_NAME = "unknown"
DEFAULT_HOST = "0.0.0.0"


class JSONEndpoint(NamedTuple):
    service_name: str
    ipv4: str
    ipv6: Optional[str]
    port: int

    def host(self) -> str:
        """Returns 'ip:port', or just the ip when no port was reported."""
        if self.port != 0:
            return f"{self.ipv4}:{self.port}"
        return self.ipv4

    def name(self) -> str:
        return self.service_name


class DefaultEndpoint:
    """Endpoint used when a span doesn't report any named host."""

    def host(self) -> str:
        return DEFAULT_HOST

    def name(self) -> str:
        return DEFAULT_SERVICE_NAME


class JSONAnnotation(NamedTuple):
    timestamp_us: int
    annotation_value: str
    endpoint: Optional[JSONEndpoint]

    def timestamp(self) -> datetime.datetime:
        return micro_to_time(self.timestamp_us)

    def value(self) -> str:
        return self.annotation_value

    def host(self) -> Optional[JSONEndpoint]:
        return self.endpoint


class JSONBinaryAnnotation(NamedTuple):
    annotation_key: str
    annotation_value: str
    endpoint: Optional[JSONEndpoint]

    def key(self) -> str:
        return self.annotation_key

    def value(self) -> str:
        return self.annotation_value

    def host(self) -> Optional[JSONEndpoint]:
        return self.endpoint


class JSONSpan(NamedTuple):
    """A v1 span as it was found on the wire.

    Ids are kept as the raw hex strings and only converted when the
    matching accessor is called, so a malformed id fails that call alone.
    """

    trace_id_hex: str
    span_name: str
    parent_id_hex: str
    id_hex: str
    timestamp_us: Optional[int]
    duration_us: Optional[int]
    debug: bool
    annotation_records: Tuple[JSONAnnotation, ...]
    binary_annotation_records: Tuple[JSONBinaryAnnotation, ...]

    def trace(self) -> str:
        return trace_id_from_hex(self.trace_id_hex)

    def span_id(self) -> str:
        return id_from_hex(self.id_hex)

    def parent(self) -> str:
        """Returns the decimal parent id, or '' for a root span."""
        if self.parent_id_hex == "":
            return ""
        return id_from_hex(self.parent_id_hex)

    def name(self) -> str:
        return self.span_name

    def timestamp(self) -> datetime.datetime:
        if self.timestamp_us is None:
            return EPOCH
        return micro_to_time(self.timestamp_us)

    def duration(self) -> datetime.timedelta:
        if self.duration_us is None:
            return datetime.timedelta(0)
        return datetime.timedelta(microseconds=self.duration_us)

    def is_debug(self) -> bool:
        return self.debug

    def annotations(self) -> List[Annotation]:
        return list(self.annotation_records)

    def binary_annotations(self) -> List[BinaryAnnotation]:
        return list(self.binary_annotation_records)
