# Export useful functions and types from private modules.
from zipkin_codec.encoding import decode_spans  # noqa
from zipkin_codec.encoding._types import Encoding  # noqa
from zipkin_codec.exception import FormatError  # noqa
from zipkin_codec.exception import ParseError  # noqa
from zipkin_codec.exception import ZipkinError  # noqa
