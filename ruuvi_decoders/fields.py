"""Primitive field codec for Ruuvi payloads.

All multi-byte values are big-endian. Readers check bounds before touching
the buffer and raise InvalidLengthError instead of reading past the end.

A data format is described as a tuple of Field entries and decoded with
decode_fields(), so the per-format modules hold layout tables rather than
extraction code.
"""

import struct
from dataclasses import dataclass
from typing import Any, Callable

from .errors import InvalidLengthError

# "Value unavailable" markers by raw width
SENTINEL_I16 = -32768  # 0x8000
SENTINEL_U8 = 0xFF
SENTINEL_U16 = 0xFFFF
SENTINEL_U24 = 0xFFFFFF
SENTINEL_U9 = 0x1FF

# V5 power word: battery in the upper 11 bits, TX power in the lower 5
BATTERY_BITS = 11
TX_POWER_BITS = 5
BATTERY_SENTINEL = (1 << BATTERY_BITS) - 1
TX_POWER_SENTINEL = (1 << TX_POWER_BITS) - 1


def _check_bounds(data: bytes, offset: int, size: int) -> None:
    if offset < 0 or offset + size > len(data):
        raise InvalidLengthError(offset + size, len(data))


def read_u8(data: bytes, offset: int) -> int:
    _check_bounds(data, offset, 1)
    return data[offset]


def read_i16(data: bytes, offset: int) -> int:
    _check_bounds(data, offset, 2)
    return struct.unpack_from(">h", data, offset)[0]


def read_u16(data: bytes, offset: int) -> int:
    _check_bounds(data, offset, 2)
    return struct.unpack_from(">H", data, offset)[0]


def read_u24(data: bytes, offset: int) -> int:
    _check_bounds(data, offset, 3)
    return (data[offset] << 16) | (data[offset + 1] << 8) | data[offset + 2]


READERS: dict[str, Callable[[bytes, int], int]] = {
    "u8": read_u8,
    "i16": read_i16,
    "u16": read_u16,
    "u24": read_u24,
}


def sentinel_or_scale(
    raw: int,
    sentinel: int | None,
    scale: float = 1,
    offset: float = 0,
) -> float | int | None:
    """Apply the linear transform, or return None for the sentinel value."""
    if sentinel is not None and raw == sentinel:
        return None
    return raw * scale + offset


def split_power_info(word: int) -> tuple[int | None, int | None]:
    """Split the V5 power word into battery voltage (mV) and TX power (dBm).

    Each sub-field has its own all-ones sentinel, so 0xFFFF yields
    (None, None).
    """
    battery_raw = (word >> TX_POWER_BITS) & BATTERY_SENTINEL
    tx_raw = word & TX_POWER_SENTINEL
    battery = sentinel_or_scale(battery_raw, BATTERY_SENTINEL, offset=1600)
    tx_power = sentinel_or_scale(tx_raw, TX_POWER_SENTINEL, scale=2, offset=-40)
    return battery, tx_power


def _decimals(scale: float) -> int | None:
    """Number of decimals needed to represent multiples of scale."""
    if float(scale).is_integer():
        return None
    text = f"{scale:.10f}".rstrip("0")
    return len(text.split(".")[1])


@dataclass(frozen=True)
class Field:
    """One entry of a data format layout table.

    The raw value is read with `kind` at `offset`. `lsb` names a (byte
    offset, bit) pair that supplies one extra least significant bit, as used
    by the 9-bit VOC and NOx indices. Packed words such as the V5 power info
    are split by their own helpers instead. `convert` replaces the linear
    transform for non-linear encodings.
    """

    name: str
    offset: int
    kind: str
    sentinel: int | None = None
    scale: float = 1
    bias: float = 0
    lsb: tuple[int, int] | None = None
    convert: Callable[[int], Any] | None = None

    @property
    def size(self) -> int:
        return {"u8": 1, "i16": 2, "u16": 2, "u24": 3}[self.kind]

    def raw(self, data: bytes) -> int:
        value = READERS[self.kind](data, self.offset)
        if self.lsb is not None:
            byte_offset, bit = self.lsb
            value = (value << 1) | ((read_u8(data, byte_offset) >> bit) & 1)
        return value

    def decode(self, data: bytes) -> Any:
        raw = self.raw(data)
        if self.sentinel is not None and raw == self.sentinel:
            return None
        if self.convert is not None:
            return self.convert(raw)
        value = sentinel_or_scale(raw, None, self.scale, self.bias)
        decimals = _decimals(self.scale)
        if decimals is not None:
            value = round(value, decimals)
        return value


def decode_fields(layout: tuple[Field, ...], data: bytes) -> dict[str, Any]:
    """Decode every field of a layout table into a name -> value mapping."""
    return {field.name: field.decode(data) for field in layout}
