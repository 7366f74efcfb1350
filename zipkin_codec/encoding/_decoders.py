import json
import logging
from typing import Any
from typing import List
from typing import Mapping
from typing import Optional
from typing import Union

from typing_extensions import TypedDict
from typing_extensions import TypeGuard

from zipkin_codec.encoding._helpers import JSONAnnotation
from zipkin_codec.encoding._helpers import JSONBinaryAnnotation
from zipkin_codec.encoding._helpers import JSONEndpoint
from zipkin_codec.encoding._helpers import JSONSpan
from zipkin_codec.encoding._types import Encoding
from zipkin_codec.encoding._types import Span
from zipkin_codec.exception import ParseError
from zipkin_codec.exception import ZipkinError
from zipkin_codec.util import MAX_TIMESTAMP_US
from zipkin_codec.util import MIN_TIMESTAMP_US

log = logging.getLogger("zipkin_codec.encoding")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def get_decoder(encoding: Encoding) -> "IDecoder":
    """Creates decoder object for the given encoding.
    :param encoding: input encoding protocol
    :type encoding: Encoding
    :return: corresponding IDecoder object
    :rtype: IDecoder
    """
    if encoding == Encoding.V1_THRIFT:
        raise NotImplementedError(f"{encoding} decoding not yet implemented")
    if encoding == Encoding.V1_JSON:
        return _V1JSONDecoder()
    raise ZipkinError(f"Unknown encoding: {encoding}")


class IDecoder:
    """Decoder interface."""

    def decode_spans(self, spans: Union[bytes, str]) -> List[Span]:
        """Decodes an encoded list of spans.
        :param spans: encoded list of spans
        :type spans: bytes
        :return: list of spans
        :rtype: list of Span
        """
        raise NotImplementedError()


class JSONv1Endpoint(TypedDict, total=False):
    serviceName: Optional[str]
    ipv4: Optional[str]
    ipv6: Optional[str]
    port: Optional[int]


class JSONv1Annotation(TypedDict, total=False):
    timestamp: int
    value: Optional[str]
    endpoint: Optional[JSONv1Endpoint]


class JSONv1BinaryAnnotation(TypedDict, total=False):
    key: Optional[str]
    value: Optional[str]
    endpoint: Optional[JSONv1Endpoint]


class JSONv1Span(TypedDict, total=False):
    traceId: str
    name: str
    id: str
    parentId: Optional[str]
    timestamp: Optional[int]
    duration: Optional[int]
    debug: Optional[bool]
    annotations: List[JSONv1Annotation]
    binaryAnnotations: List[JSONv1BinaryAnnotation]


# Field types are checked by the _get_* helpers below, these only make
# sure we're looking at a JSON object.
def _is_span_object(value: Any) -> TypeGuard[JSONv1Span]:
    return isinstance(value, dict)


def _is_annotation_object(value: Any) -> TypeGuard[JSONv1Annotation]:
    return isinstance(value, dict)


def _is_binary_annotation_object(value: Any) -> TypeGuard[JSONv1BinaryAnnotation]:
    return isinstance(value, dict)


def _is_endpoint_object(value: Any) -> TypeGuard[JSONv1Endpoint]:
    return isinstance(value, dict)


def _is_json_int(value: object) -> TypeGuard[int]:
    # bool is an int subclass but true/false aren't valid numbers here
    return isinstance(value, int) and not isinstance(value, bool)


def _get_str(
    obj: Mapping[str, object], key: str, where: str, required: bool = False
) -> str:
    value = obj.get(key)
    if value is None:
        if required:
            raise ParseError(f"{where}: missing required field '{key}'")
        return ""
    if not isinstance(value, str):
        raise ParseError(f"{where}: '{key}' must be a string, got {value!r}")
    return value


def _get_int(
    obj: Mapping[str, object], key: str, where: str, required: bool = False
) -> Optional[int]:
    value = obj.get(key)
    if value is None:
        if required:
            raise ParseError(f"{where}: missing required field '{key}'")
        return None
    if not _is_json_int(value):
        raise ParseError(f"{where}: '{key}' must be an integer, got {value!r}")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ParseError(f"{where}: '{key}' overflows a 64-bit integer")
    return value


def _get_timestamp(
    obj: Mapping[str, object], key: str, where: str, required: bool = False
) -> Optional[int]:
    value = _get_int(obj, key, where, required)
    if value is not None and not MIN_TIMESTAMP_US <= value <= MAX_TIMESTAMP_US:
        raise ParseError(f"{where}: '{key}' is outside years 1 to 9999")
    return value


def _get_list(obj: Mapping[str, object], key: str, where: str) -> List[Any]:
    if key not in obj:
        raise ParseError(f"{where}: missing required field '{key}'")
    value = obj[key]
    if not isinstance(value, list):
        raise ParseError(f"{where}: '{key}' must be an array, got {value!r}")
    return value


class _V1JSONDecoder(IDecoder):
    """JSON decoder for V1 spans."""

    def decode_spans(self, spans: Union[bytes, str]) -> List[Span]:
        """Decodes a JSON list of v1 spans.

        Only the shape of the payload is checked here. Ids are left as hex
        and converted by the span accessors, so a malformed id doesn't
        prevent the rest of the batch from being decoded.

        :param spans: JSON encoded list of spans
        :type spans: bytes or str
        :return: decoded spans, in the same order as the payload
        :rtype: list of Span
        :raises ParseError: if the payload isn't a JSON list of span objects
        """
        try:
            if isinstance(spans, bytes):
                spans = spans.decode("utf-8")
            raw_spans = json.loads(spans)
        except (ValueError, RecursionError) as e:
            # ValueError covers both JSONDecodeError and UnicodeDecodeError,
            # RecursionError is raised for deeply nested arrays
            raise ParseError(f"Invalid JSON payload: {e}") from e

        if not isinstance(raw_spans, list):
            raise ParseError("Expected a JSON array of spans")

        decoded: List[Span] = [
            self._decode_span(raw_span, f"span {index}")
            for index, raw_span in enumerate(raw_spans)
        ]
        log.debug("Decoded %d v1 JSON spans", len(decoded))
        return decoded

    def _decode_span(self, raw_span: Any, where: str) -> JSONSpan:
        if not _is_span_object(raw_span):
            raise ParseError(f"{where}: expected a JSON object, got {raw_span!r}")

        debug = raw_span.get("debug")
        if debug is None:
            debug = False
        elif not isinstance(debug, bool):
            raise ParseError(f"{where}: 'debug' must be a boolean, got {debug!r}")

        annotations = tuple(
            self._decode_annotation(raw, f"{where} annotation {index}")
            for index, raw in enumerate(_get_list(raw_span, "annotations", where))
        )
        binary_annotations = tuple(
            self._decode_binary_annotation(raw, f"{where} binary annotation {index}")
            for index, raw in enumerate(
                _get_list(raw_span, "binaryAnnotations", where)
            )
        )

        return JSONSpan(
            trace_id_hex=_get_str(raw_span, "traceId", where, required=True),
            span_name=_get_str(raw_span, "name", where, required=True),
            parent_id_hex=_get_str(raw_span, "parentId", where),
            id_hex=_get_str(raw_span, "id", where, required=True),
            timestamp_us=_get_timestamp(raw_span, "timestamp", where),
            duration_us=_get_int(raw_span, "duration", where),
            debug=debug,
            annotation_records=annotations,
            binary_annotation_records=binary_annotations,
        )

    def _decode_annotation(self, raw: Any, where: str) -> JSONAnnotation:
        if not _is_annotation_object(raw):
            raise ParseError(f"{where}: expected a JSON object, got {raw!r}")

        timestamp = _get_timestamp(raw, "timestamp", where, required=True)
        assert timestamp is not None
        return JSONAnnotation(
            timestamp_us=timestamp,
            annotation_value=_get_str(raw, "value", where),
            endpoint=self._decode_endpoint(raw.get("endpoint"), where),
        )

    def _decode_binary_annotation(self, raw: Any, where: str) -> JSONBinaryAnnotation:
        if not _is_binary_annotation_object(raw):
            raise ParseError(f"{where}: expected a JSON object, got {raw!r}")

        return JSONBinaryAnnotation(
            annotation_key=_get_str(raw, "key", where),
            annotation_value=_get_str(raw, "value", where),
            endpoint=self._decode_endpoint(raw.get("endpoint"), where),
        )

    def _decode_endpoint(self, raw: Any, where: str) -> Optional[JSONEndpoint]:
        if raw is None:
            return None
        if not _is_endpoint_object(raw):
            raise ParseError(f"{where}: 'endpoint' must be an object, got {raw!r}")

        where = f"{where} endpoint"
        ipv6 = raw.get("ipv6")
        if ipv6 is not None and not isinstance(ipv6, str):
            raise ParseError(f"{where}: 'ipv6' must be a string, got {ipv6!r}")

        return JSONEndpoint(
            service_name=_get_str(raw, "serviceName", where),
            ipv4=_get_str(raw, "ipv4", where),
            ipv6=ipv6,
            port=_get_int(raw, "port", where) or 0,
        )
