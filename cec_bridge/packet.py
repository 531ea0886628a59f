"""Decoding of cec-client TRAFFIC lines and encoding of `tx` commands.

A traffic line looks like::

    TRAFFIC: [            2891]\t>> 0f:36

Everything up to the end of the timestamp bracket is metadata, the arrow
gives the direction (`<<` received, `>>` sent) and the tail is the CEC frame
as colon separated hex bytes: header (source nibble, target nibble), opcode,
arguments.
"""

import re
from dataclasses import dataclass, field

from cec_bridge.errors import CecEncodeError

# Stand-in for a token that is not valid hex. Decoding never aborts a line;
# the sentinel is carried in place of the value instead.
INVALID_BYTE = -1

_BRACKET_END_RE = re.compile(r"\]\s+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


@dataclass
class ParsedPacket:
    tokens: list[str] = field(default_factory=list)
    source: int = 0
    target: int = 0
    opcode: int = 0
    args: list[int] = field(default_factory=list)

    @property
    def is_polling(self) -> bool:
        return len(self.tokens) <= 1

    @property
    def has_invalid_bytes(self) -> bool:
        return INVALID_BYTE in (self.source, self.target, self.opcode) or (
            INVALID_BYTE in self.args
        )


def parse_hex(token: str) -> int:
    if not _HEX_RE.fullmatch(token):
        return INVALID_BYTE

    return int(token, 16)


def parse_frame(frame: str) -> ParsedPacket:
    """Decode the hex tail of a traffic line, e.g. `0f:80:00:00:10:00`."""
    tokens = frame.strip().split(":")
    packet = ParsedPacket(tokens=tokens)

    header = tokens[0]
    if len(header) >= 2:
        packet.source = parse_hex(header[0])
        packet.target = parse_hex(header[1])

    if len(tokens) > 1:
        packet.opcode = parse_hex(tokens[1])
        packet.args = [parse_hex(token) for token in tokens[2:]]

    return packet


def parse_traffic(line: str) -> ParsedPacket:
    """Decode a full TRAFFIC line into a packet."""
    match = _BRACKET_END_RE.search(line)
    command = line[match.end() :] if match else line  # "<< 0f:..:.."
    command = command[command.find(" ") + 1 :]  # "0f:..:.."
    return parse_frame(command)


def to_word(high: int, low: int) -> int:
    return (high << 8) | low


def addr_to_str(addr: int) -> str:
    return f"{addr >> 12}.{(addr >> 8) & 15}.{(addr >> 4) & 15}.{addr  & 15}"


def decode_string(args: list[int]) -> str:
    return "".join(chr(x) for x in args if x != INVALID_BYTE)


def _hex(value: int) -> str:
    return format(int(value), "x")


def encode_command(*command: int) -> str:
    """Raw `tx` line; header, opcode and arguments are all up to the caller."""
    return "tx " + ":".join(_hex(x) for x in command)


def encode_operation(
    source: int, target: int, opcode: int, params: list[int] | None = None
) -> str:
    base = f"tx {_hex(source & 0xF)}{_hex(target & 0xF)}:{_hex(opcode)}"
    if params:
        return base + ":" + ":".join(_hex(p) for p in params)

    return base


def encode_boolean_param(value: bool) -> list[int]:
    return [0x01 if value else 0x00]


def encode_integer_param(value: int) -> list[int]:
    """Big-endian, always three bytes. Bits above 24 are dropped."""
    return [(value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF]


def encode_string_param(value: str) -> list[int]:
    """One byte per character. Characters above 0xFF cannot be framed."""
    params = []
    for ch in value:
        code = ord(ch)
        if code > 0xFF:
            raise CecEncodeError(f"Character {ch!r} does not fit in one byte")
        params.append(code)

    return params
