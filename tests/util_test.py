import datetime

import pytest

from zipkin_codec import util
from zipkin_codec.exception import FormatError
from zipkin_codec.exception import ZipkinError


def test_id_from_hex():
    assert util.id_from_hex("17133d482ba4f605") == "1662740067609015813"
    assert util.id_from_hex("b6dbb1c2b362bf51") == "13176320584593882961"
    assert util.id_from_hex("B6DBB1C2B362BF51") == "13176320584593882961"
    assert util.id_from_hex("ffffffffffffffff") == str(2**64 - 1)


def test_id_from_hex_short_ids():
    assert util.id_from_hex("0") == "0"
    assert util.id_from_hex("0000000000000000") == "0"
    assert util.id_from_hex("a") == "10"
    assert util.id_from_hex("00ff") == "255"


def test_id_from_hex_too_long():
    with pytest.raises(FormatError) as e:
        util.id_from_hex("17133d482ba4f6050")

    assert "cannot be longer than 16 hex characters" in str(e.value)
    assert e.value.value == "17133d482ba4f6050"


@pytest.mark.parametrize(
    "bad_id", ["", "xyz", "0x12", "+12", "-1", "1_000", " 12", "12 ", "1234567g"]
)
def test_id_from_hex_rejects_non_hex(bad_id):
    with pytest.raises(FormatError):
        util.id_from_hex(bad_id)


def test_trace_id_from_hex_64bit():
    assert util.trace_id_from_hex("463ac35c9f6413ad") == "463ac35c9f6413ad"
    assert util.trace_id_from_hex("463AC35C9F6413AD") == "463ac35c9f6413ad"


def test_trace_id_from_hex_drops_leading_zeros():
    assert util.trace_id_from_hex("00000000000000ff") == "ff"
    assert util.trace_id_from_hex("0") == "0"


def test_trace_id_from_hex_128bit():
    assert (
        util.trace_id_from_hex("48485a3953bb61246453f91ca2d4880f")
        == "48485a3953bb61246453f91ca2d4880f"
    )
    # low half keeps its padding when the high half is set
    assert (
        util.trace_id_from_hex("000000000000000a0000000000000001")
        == "a0000000000000001"
    )
    assert util.trace_id_from_hex("10000000000000001") == "10000000000000001"


def test_trace_id_from_hex_128bit_zero_high_half():
    assert util.trace_id_from_hex("0000000000000000463ac35c9f6413ad") == (
        "463ac35c9f6413ad"
    )
    assert util.trace_id_from_hex("00000000000000000000000000000001") == "1"


def test_trace_id_from_hex_too_long():
    with pytest.raises(FormatError) as e:
        util.trace_id_from_hex("048485a3953bb61246453f91ca2d4880f")

    assert "cannot be longer than 32 hex characters" in str(e.value)


@pytest.mark.parametrize(
    "bad_id",
    ["", "zz", "48485a3953bb6124645zf91ca2d4880f", "4848-a3953bb61246453f91ca2d4880f"],
)
def test_trace_id_from_hex_rejects_non_hex(bad_id):
    with pytest.raises(FormatError):
        util.trace_id_from_hex(bad_id)


def test_micro_to_time():
    assert util.micro_to_time(0) == util.EPOCH
    assert util.micro_to_time(1500000000000001) == datetime.datetime(
        2017, 7, 14, 2, 40, 0, 1, tzinfo=datetime.timezone.utc
    )


def test_micro_to_time_limits():
    assert util.micro_to_time(util.MIN_TIMESTAMP_US) == datetime.datetime.min.replace(
        tzinfo=datetime.timezone.utc
    )
    assert util.micro_to_time(util.MAX_TIMESTAMP_US) == datetime.datetime.max.replace(
        tzinfo=datetime.timezone.utc
    )


@pytest.mark.parametrize("microseconds", [2**62, -(2**62)])
def test_micro_to_time_out_of_range(microseconds):
    with pytest.raises(ZipkinError) as e:
        util.micro_to_time(microseconds)

    assert "Timestamp out of range" in str(e.value)
