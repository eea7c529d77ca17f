"""Decoder for Ruuvi Air Extended format (data format E1 / 225).

40-byte payload layout:
0:      Data format (0xE1)
1-2:    Temperature (signed, × 0.005 °C)
3-4:    Humidity (× 0.0025 %)
5-6:    Pressure (+ 50000 Pa)
7-8:    PM 1.0 (× 0.1 µg/m³)
9-10:   PM 2.5 (× 0.1 µg/m³)
11-12:  PM 4.0 (× 0.1 µg/m³)
13-14:  PM 10.0 (× 0.1 µg/m³)
15-16:  CO₂ (ppm)
17:     VOC index (bits 1-8, LSB in flags bit 6)
18:     NOₓ index (bits 1-8, LSB in flags bit 7)
19-21:  Luminosity (× 0.01 lux)
22-24:  Reserved
25-27:  Measurement sequence
28:     Flags
29-33:  Reserved
34-39:  MAC address

See https://docs.ruuvi.com/communication/bluetooth-advertisements/data-format-e1
"""

from .errors import InvalidLengthError, UnsupportedFormatError
from .fields import SENTINEL_I16, SENTINEL_U9, SENTINEL_U16, SENTINEL_U24, Field, decode_fields
from .mac import format_mac
from .models import DataFormat, E1Record

PAYLOAD_LENGTH = DataFormat.E1.payload_length
MAC_OFFSET = PAYLOAD_LENGTH - 6
FLAGS_OFFSET = 28

LAYOUT = (
    Field("temperature", 1, "i16", SENTINEL_I16, scale=0.005),
    Field("humidity", 3, "u16", SENTINEL_U16, scale=0.0025),
    Field("pressure", 5, "u16", SENTINEL_U16, bias=50000.0),
    Field("pm1_0", 7, "u16", SENTINEL_U16, scale=0.1),
    Field("pm2_5", 9, "u16", SENTINEL_U16, scale=0.1),
    Field("pm4_0", 11, "u16", SENTINEL_U16, scale=0.1),
    Field("pm10_0", 13, "u16", SENTINEL_U16, scale=0.1),
    Field("co2", 15, "u16", SENTINEL_U16),
    Field("voc_index", 17, "u8", SENTINEL_U9, lsb=(FLAGS_OFFSET, 6)),
    Field("nox_index", 18, "u8", SENTINEL_U9, lsb=(FLAGS_OFFSET, 7)),
    Field("luminosity", 19, "u24", SENTINEL_U24, scale=0.01),
    Field("measurement_sequence", 25, "u24", SENTINEL_U24),
    Field("flags", FLAGS_OFFSET, "u8"),
)


def decode_e1(payload: bytes) -> E1Record:
    """Decode a data format E1 payload.

    Raises:
        InvalidLengthError: If the payload is not exactly 40 bytes
        UnsupportedFormatError: If the format byte is not 0xE1
    """
    payload = bytes(payload)
    if len(payload) != PAYLOAD_LENGTH:
        raise InvalidLengthError(PAYLOAD_LENGTH, len(payload))
    if payload[0] != DataFormat.E1:
        raise UnsupportedFormatError(payload[0])

    return E1Record(
        **decode_fields(LAYOUT, payload),
        mac_address=format_mac(payload[MAC_OFFSET:]),
    )
