import pytest

from cec_bridge.errors import CecEncodeError
from cec_bridge.packet import (
    INVALID_BYTE,
    addr_to_str,
    decode_string,
    encode_boolean_param,
    encode_command,
    encode_integer_param,
    encode_operation,
    encode_string_param,
    parse_frame,
    parse_traffic,
)


def test__parse_traffic_should_decode_header_opcode_and_args():
    packet = parse_traffic("TRAFFIC: [            2891]\t<< 0f:80:00:00:10:00")

    assert packet.tokens == ["0f", "80", "00", "00", "10", "00"]
    assert packet.source == 0x0
    assert packet.target == 0xF
    assert packet.opcode == 0x80
    assert packet.args == [0x00, 0x00, 0x10, 0x00]
    assert packet.is_polling is False


def test__parse_traffic_should_accept_space_after_timestamp():
    packet = parse_traffic("TRAFFIC: [18:35:40.1] << 0f:36")

    assert (packet.source, packet.target, packet.opcode, packet.args) == (0, 0xF, 0x36, [])


def test__parse_traffic_should_mark_polling_message():
    packet = parse_traffic("TRAFFIC: [  1234]\t>> 11")

    assert packet.tokens == ["11"]
    assert packet.is_polling is True
    assert (packet.source, packet.target) == (1, 1)


def test__parse_frame_should_skip_short_header():
    packet = parse_frame("f:47:41")

    assert (packet.source, packet.target) == (0, 0)
    assert packet.opcode == 0x47
    assert packet.args == [0x41]


def test__parse_frame_should_keep_invalid_tokens_as_sentinel():
    packet = parse_frame("4x:zz:01:g1")

    assert packet.source == 4
    assert packet.target == INVALID_BYTE
    assert packet.opcode == INVALID_BYTE
    assert packet.args == [0x01, INVALID_BYTE]
    assert packet.has_invalid_bytes is True


def test__encode_operation_should_format_lower_hex_without_padding():
    assert encode_operation(0x1, 0x0, 0x04) == "tx 10:4"
    assert encode_operation(0x4, 0xF, 0x82, [0x10, 0x00]) == "tx 4f:82:10:0"
    assert encode_operation(0xE, 0xB, 0xA0, [0xAB]) == "tx eb:a0:ab"


def test__encode_operation_should_round_trip_through_decoder():
    line = encode_operation(0x1, 0x5, 0x7A, [0x01, 0x20, 0xFF])
    packet = parse_traffic(f"TRAFFIC: [ 100]\t>> {line.removeprefix('tx ')}")

    assert packet.source == 0x1
    assert packet.target == 0x5
    assert packet.opcode == 0x7A
    assert packet.args == [0x01, 0x20, 0xFF]


def test__encode_command_should_join_numbers():
    assert encode_command(0x1F, 0x82, 0x10, 0x00) == "tx 1f:82:10:0"


def test__encode_boolean_param():
    assert encode_boolean_param(True) == [1]
    assert encode_boolean_param(False) == [0]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, [0, 0, 0]),
        (0x1234, [0x00, 0x12, 0x34]),
        (0xFFFFFF, [0xFF, 0xFF, 0xFF]),
        (0x1000000, [0, 0, 0]),
        (0x1ABCDEF, [0xAB, 0xCD, 0xEF]),
    ],
)
def test__encode_integer_param_should_use_three_bytes(value, expected):
    assert encode_integer_param(value) == expected


def test__encode_string_param_should_use_one_byte_per_char():
    assert encode_string_param("TV") == [0x54, 0x56]
    assert encode_string_param("é") == [0xE9]
    with pytest.raises(CecEncodeError):
        encode_string_param("☺")


def test__decode_string_should_skip_invalid_bytes():
    assert decode_string([0x4B, INVALID_BYTE, 0x6F]) == "Ko"


def test__addr_to_str():
    assert addr_to_str(0x1000) == "1.0.0.0"
    assert addr_to_str(0x2130) == "2.1.3.0"
