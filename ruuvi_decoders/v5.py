"""Decoder for RuuviTag RAWv2 (data format 5).

24-byte payload layout:
0:      Data format (0x05)
1-2:    Temperature (signed, × 0.005 °C)
3-4:    Humidity (× 0.0025 %)
5-6:    Pressure (+ 50000 Pa)
7-8:    Acceleration X (signed, mG)
9-10:   Acceleration Y (signed, mG)
11-12:  Acceleration Z (signed, mG)
13-14:  Battery voltage (11 bits, + 1600 mV) + TX power (5 bits, × 2 - 40 dBm)
15:     Movement counter
16-17:  Measurement sequence
18-23:  MAC address

See https://docs.ruuvi.com/communication/bluetooth-advertisements/data-format-5-rawv2
"""

from .errors import InvalidLengthError, UnsupportedFormatError
from .fields import (
    SENTINEL_I16,
    SENTINEL_U16,
    Field,
    decode_fields,
    read_u16,
    split_power_info,
)
from .mac import format_mac
from .models import DataFormat, V5Record

PAYLOAD_LENGTH = DataFormat.V5.payload_length
MAC_OFFSET = PAYLOAD_LENGTH - 6
POWER_INFO_OFFSET = 13

LAYOUT = (
    Field("temperature", 1, "i16", SENTINEL_I16, scale=0.005),
    Field("humidity", 3, "u16", SENTINEL_U16, scale=0.0025),
    Field("pressure", 5, "u16", SENTINEL_U16, bias=50000.0),
    Field("acceleration_x", 7, "i16", SENTINEL_I16),
    Field("acceleration_y", 9, "i16", SENTINEL_I16),
    Field("acceleration_z", 11, "i16", SENTINEL_I16),
    Field("movement_counter", 15, "u8"),
    Field("measurement_sequence", 16, "u16"),
)


def decode_v5(payload: bytes) -> V5Record:
    """Decode a data format 5 payload.

    Raises:
        InvalidLengthError: If the payload is not exactly 24 bytes
        UnsupportedFormatError: If the format byte is not 0x05
    """
    payload = bytes(payload)
    if len(payload) != PAYLOAD_LENGTH:
        raise InvalidLengthError(PAYLOAD_LENGTH, len(payload))
    if payload[0] != DataFormat.V5:
        raise UnsupportedFormatError(payload[0])

    battery_voltage, tx_power = split_power_info(read_u16(payload, POWER_INFO_OFFSET))
    return V5Record(
        **decode_fields(LAYOUT, payload),
        battery_voltage=battery_voltage,
        tx_power=tx_power,
        mac_address=format_mac(payload[MAC_OFFSET:]),
    )
