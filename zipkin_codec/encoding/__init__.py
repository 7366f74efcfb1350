from typing import List
from typing import Optional
from typing import Union

from zipkin_codec.encoding._decoders import get_decoder
from zipkin_codec.encoding._decoders import IDecoder  # noqa: F401
from zipkin_codec.encoding._helpers import DefaultEndpoint  # noqa: F401
from zipkin_codec.encoding._types import Annotation  # noqa: F401
from zipkin_codec.encoding._types import BinaryAnnotation  # noqa: F401
from zipkin_codec.encoding._types import Encoding
from zipkin_codec.encoding._types import Endpoint  # noqa: F401
from zipkin_codec.encoding._types import Span
from zipkin_codec.exception import ZipkinError

CONTENT_TYPES = {
    "application/json": Encoding.V1_JSON,
    "application/x-thrift": Encoding.V1_THRIFT,
}


def detect_encoding(content_type: Optional[str]) -> Encoding:
    """Returns the span encoding for an HTTP Content-Type header.

    Zipkin clients that don't send a Content-Type send JSON, so a missing
    header maps to V1_JSON.

    :param content_type: value of the Content-Type header, may be None.
    :type content_type: str
    :returns: span encoding.
    :rtype: Encoding
    """
    if not content_type:
        return Encoding.V1_JSON

    media_type = content_type.split(";", 1)[0].strip().lower()
    try:
        return CONTENT_TYPES[media_type]
    except KeyError:
        raise ZipkinError(f"Unknown or unsupported content type: {content_type}")


def decode_spans(
    payload: Union[bytes, str], content_type: Optional[str] = None
) -> List[Span]:
    """Decodes a batch of spans received with the given content type.

    :param payload: encoded list of spans.
    :type payload: bytes
    :param content_type: optional Content-Type the payload was sent with.
    :type content_type: str
    :returns: decoded spans.
    :rtype: list of Span
    """
    decoder = get_decoder(detect_encoding(content_type))
    return decoder.decode_spans(payload)
