import datetime
import re

from zipkin_codec.exception import FormatError
from zipkin_codec.exception import ZipkinError


EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

# Range of microsecond offsets from EPOCH that a datetime can represent.
MIN_TIMESTAMP_US = (
    datetime.datetime.min.replace(tzinfo=datetime.timezone.utc) - EPOCH
) // datetime.timedelta(microseconds=1)
MAX_TIMESTAMP_US = (
    datetime.datetime.max.replace(tzinfo=datetime.timezone.utc) - EPOCH
) // datetime.timedelta(microseconds=1)

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def _parse_hex_uint64(hex_string: str) -> int:
    """Parses a hex string as an unsigned 64-bit int.

    Unlike `int(x, 16)` this refuses signs, '0x' prefixes, underscores
    and surrounding whitespace, so '+1', '0x1' and ' 1' are all errors.

    :param hex_string: up to 16 hex digits, any case
    :returns: the parsed value
    :raises FormatError: if the string isn't plain hex
    """
    if not _HEX_RE.fullmatch(hex_string):
        raise FormatError(f"invalid hex identifier: {hex_string!r}", hex_string)
    return int(hex_string, 16)


def trace_id_from_hex(hex_string: str) -> str:
    """Converts a 64 or 128-bit hex trace id to its canonical form.

    128-bit ids are split into a high and a low 64-bit half. A zero high
    half is never printed, so the same trace reported with a 16 or a 32
    character id ends up with the same canonical id.

    Examples:
        '463ac35c9f6413ad'                 => '463ac35c9f6413ad'
        '00000000000000000000000000000001' => '1'
        '000000000000000a0000000000000001' => 'a0000000000000001'

    :param hex_string: hex trace id, at most 32 characters
    :returns: canonical lowercase hex trace id
    :raises FormatError: if the id is too long or isn't hex
    """
    if len(hex_string) > 32:
        raise FormatError(
            f"TraceID cannot be longer than 32 hex characters: {hex_string}",
            hex_string,
        )

    hi = 0
    if len(hex_string) > 16:
        hi_len = len(hex_string) - 16
        hi = _parse_hex_uint64(hex_string[:hi_len])
        lo = _parse_hex_uint64(hex_string[hi_len:])
    else:
        lo = _parse_hex_uint64(hex_string)

    if hi == 0:
        return f"{lo:x}"
    return f"{hi:x}{lo:016x}"


def id_from_hex(hex_string: str) -> str:
    """Converts a 64-bit hex span id to a decimal string.

    Examples:
        '17133d482ba4f605' => '1662740067609015813'
        'b6dbb1c2b362bf51' => '13176320584593882961'

    :param hex_string: hex span id, at most 16 characters
    :returns: unsigned decimal representation of the id
    :raises FormatError: if the id is too long or isn't hex
    """
    if len(hex_string) > 16:
        raise FormatError(
            f"ID cannot be longer than 16 hex characters: {hex_string}",
            hex_string,
        )
    return str(_parse_hex_uint64(hex_string))


def micro_to_time(microseconds: int) -> datetime.datetime:
    """Converts microseconds since the epoch to an aware UTC datetime.

    :raises ZipkinError: if the result falls outside years 1 to 9999
    """
    if not MIN_TIMESTAMP_US <= microseconds <= MAX_TIMESTAMP_US:
        raise ZipkinError(f"Timestamp out of range: {microseconds}")
    return EPOCH + datetime.timedelta(microseconds=microseconds)
