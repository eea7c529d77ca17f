"""Decoder for Ruuvi Air BLE4 format (data format 6).

20-byte payload layout:
0:      Data format (0x06)
1-2:    Temperature (signed, × 0.005 °C)
3-4:    Humidity (× 0.0025 %)
5-6:    Pressure (+ 50000 Pa)
7-8:    PM 2.5 (× 0.1 µg/m³)
9-10:   CO₂ (ppm)
11:     VOC index (bits 1-8, LSB in flags bit 6)
12:     NOₓ index (bits 1-8, LSB in flags bit 7)
13:     Luminosity (logarithmic code)
14:     Reserved
15:     Measurement sequence (8-bit)
16:     Flags
17-19:  Lowest 3 bytes of the MAC address

See https://docs.ruuvi.com/communication/bluetooth-advertisements/data-format-6
"""

import math

from .errors import InvalidLengthError, UnsupportedFormatError
from .fields import SENTINEL_I16, SENTINEL_U8, SENTINEL_U9, SENTINEL_U16, Field, decode_fields
from .mac import format_mac
from .models import DataFormat, V6Record

PAYLOAD_LENGTH = DataFormat.V6.payload_length
MAC_LENGTH = 3
MAC_OFFSET = PAYLOAD_LENGTH - MAC_LENGTH
FLAGS_OFFSET = 16

# Luminosity codes 0..254 map logarithmically onto 0..65535 lux
LUMINOSITY_MAX_VALUE = 65535.0
LUMINOSITY_MAX_CODE = 254
LUMINOSITY_DELTA = math.log(LUMINOSITY_MAX_VALUE + 1) / LUMINOSITY_MAX_CODE


def decode_luminosity(code: int) -> float:
    """Decode the logarithmic luminosity code to lux."""
    value = math.exp(code * LUMINOSITY_DELTA) - 1
    return round(min(value, LUMINOSITY_MAX_VALUE), 2)


LAYOUT = (
    Field("temperature", 1, "i16", SENTINEL_I16, scale=0.005),
    Field("humidity", 3, "u16", SENTINEL_U16, scale=0.0025),
    Field("pressure", 5, "u16", SENTINEL_U16, bias=50000.0),
    Field("pm2_5", 7, "u16", SENTINEL_U16, scale=0.1),
    Field("co2", 9, "u16", SENTINEL_U16),
    Field("voc_index", 11, "u8", SENTINEL_U9, lsb=(FLAGS_OFFSET, 6)),
    Field("nox_index", 12, "u8", SENTINEL_U9, lsb=(FLAGS_OFFSET, 7)),
    Field("luminosity", 13, "u8", SENTINEL_U8, convert=decode_luminosity),
    Field("measurement_sequence", 15, "u8"),
    Field("flags", FLAGS_OFFSET, "u8"),
)


def decode_v6(payload: bytes) -> V6Record:
    """Decode a data format 6 payload.

    Raises:
        InvalidLengthError: If the payload is not exactly 20 bytes
        UnsupportedFormatError: If the format byte is not 0x06
    """
    payload = bytes(payload)
    if len(payload) != PAYLOAD_LENGTH:
        raise InvalidLengthError(PAYLOAD_LENGTH, len(payload))
    if payload[0] != DataFormat.V6:
        raise UnsupportedFormatError(payload[0])

    return V6Record(
        **decode_fields(LAYOUT, payload),
        mac_address=format_mac(payload[MAC_OFFSET:], length=MAC_LENGTH),
    )
