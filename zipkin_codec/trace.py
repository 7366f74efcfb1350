import datetime
import time
from typing import Iterable
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Sequence

from typing_extensions import TypeGuard

from zipkin_codec.encoding._helpers import DefaultEndpoint
from zipkin_codec.encoding._types import Annotation
from zipkin_codec.encoding._types import BinaryAnnotation
from zipkin_codec.encoding._types import Endpoint
from zipkin_codec.encoding._types import Span
from zipkin_codec.util import EPOCH

# Core annotations that are always recorded by the instrumented service.
CLIENT_SEND = "cs"
CLIENT_RECV = "cr"
SERVER_SEND = "ss"
SERVER_RECV = "sr"
LOCAL_COMPONENT = "lc"

_CORE_ANNOTATIONS = {CLIENT_SEND, CLIENT_RECV, SERVER_SEND, SERVER_RECV}


class TraceAnnotation(NamedTuple):
    timestamp: datetime.datetime
    value: str
    host: str
    service_name: str


class TraceBinaryAnnotation(NamedTuple):
    key: str
    value: str
    host: str
    service_name: str


class TraceSpan(NamedTuple):
    """
    A span with every field resolved, ready to be turned into points

    :param id: decimal span id
    :param trace_id: canonical hex trace id
    :param name: span name
    :param timestamp: start of the span, UTC
    :param duration: never negative
    :param parent_id: decimal parent id, the span's own id for root spans
    :param service_name: name of the service that recorded the span
    """

    id: str
    trace_id: str
    name: str
    timestamp: datetime.datetime
    duration: datetime.timedelta
    parent_id: str
    service_name: str
    annotations: List[TraceAnnotation]
    binary_annotations: List[TraceBinaryAnnotation]


def _is_named(endpoint: Optional[Endpoint]) -> TypeGuard[Endpoint]:
    return endpoint is not None and endpoint.name() != ""


def service_endpoint(
    annotations: Sequence[Annotation],
    binary_annotations: Sequence[BinaryAnnotation],
) -> Endpoint:
    """Finds the endpoint of the service that recorded the span.

    Core client/server annotations win, then the local component tag,
    then any annotation with a named host.

    :param annotations: the span's annotations
    :param binary_annotations: the span's binary annotations
    :returns: the service endpoint, or a DefaultEndpoint if none is named
    """
    for annotation in annotations:
        host = annotation.host()
        if annotation.value() in _CORE_ANNOTATIONS and _is_named(host):
            return host

    for binary_annotation in binary_annotations:
        host = binary_annotation.host()
        if binary_annotation.key() == LOCAL_COMPONENT and _is_named(host):
            return host

    for annotation in annotations:
        host = annotation.host()
        if _is_named(host):
            return host

    return DefaultEndpoint()


def guess_timestamp(span: Span) -> datetime.datetime:
    """Returns the span timestamp, falling back to its earliest annotation.

    Spans that carry neither are stamped with the current time.
    """
    timestamp = span.timestamp()
    if timestamp != EPOCH:
        return timestamp

    annotation_times = (annotation.timestamp() for annotation in span.annotations())
    earliest = min((ts for ts in annotation_times if ts != EPOCH), default=None)
    if earliest is not None:
        return earliest
    return datetime.datetime.fromtimestamp(time.time(), tz=datetime.timezone.utc)


def convert_duration(span: Span) -> datetime.timedelta:
    duration = span.duration()
    if duration < datetime.timedelta(0):
        return datetime.timedelta(0)
    return duration


def parent_id(span: Span) -> str:
    """Root spans point to themselves."""
    parent = span.parent()
    if parent != "":
        return parent
    return span.span_id()


def new_trace(spans: Iterable[Span]) -> List[TraceSpan]:
    """Resolves every field of the decoded spans.

    :param spans: spans returned by a decoder.
    :returns: resolved spans, in the same order.
    :raises FormatError: if any span has a malformed identifier.
    """
    trace = []
    for span in spans:
        annotations = span.annotations()
        binary_annotations = span.binary_annotations()
        endpoint = service_endpoint(annotations, binary_annotations)

        trace.append(
            TraceSpan(
                id=span.span_id(),
                trace_id=span.trace(),
                name=span.name(),
                timestamp=guess_timestamp(span),
                duration=convert_duration(span),
                parent_id=parent_id(span),
                service_name=endpoint.name(),
                annotations=[
                    TraceAnnotation(
                        timestamp=annotation.timestamp(),
                        value=annotation.value(),
                        host=(annotation.host() or endpoint).host(),
                        service_name=(annotation.host() or endpoint).name(),
                    )
                    for annotation in annotations
                ],
                binary_annotations=[
                    TraceBinaryAnnotation(
                        key=binary_annotation.key(),
                        value=binary_annotation.value(),
                        host=(binary_annotation.host() or endpoint).host(),
                        service_name=(binary_annotation.host() or endpoint).name(),
                    )
                    for binary_annotation in binary_annotations
                ],
            )
        )
    return trace
