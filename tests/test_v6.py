"""Tests for Ruuvi Air BLE4 format (data format 6)."""

import pytest

from ruuvi_decoders.errors import InvalidLengthError, UnsupportedFormatError
from ruuvi_decoders.models import V6Record
from ruuvi_decoders.v6 import decode_luminosity, decode_v6

VALID = "06170C5668C79E007000C90501D9FFCD004C884F"
MAXIMUM = "067FFF9C40FFFE27109C40FAFAFEFFFF074C8F4F"
MINIMUM = "06800100000000000000000000000000004C884F"


def _decode(hex_data: str) -> V6Record:
    return decode_v6(bytes.fromhex(hex_data))


def _make_format6(
    voc: int = 100,
    nox: int = 50,
    luminosity_code: int = 0,
    pm_2_5_raw: int = 100,
    co2: int = 500,
) -> bytes:
    """Build a format 6 payload with a neutral environment."""
    payload = bytearray(20)
    payload[0] = 0x06
    payload[7:9] = pm_2_5_raw.to_bytes(2, "big")
    payload[9:11] = co2.to_bytes(2, "big")
    # VOC: MSB in byte 11, LSB in flags bit 6
    payload[11] = (voc >> 1) & 0xFF
    # NOx: MSB in byte 12, LSB in flags bit 7
    payload[12] = (nox >> 1) & 0xFF
    payload[13] = luminosity_code
    payload[16] = ((voc & 1) << 6) | ((nox & 1) << 7)
    payload[17:20] = bytes.fromhex("4C884F")
    return bytes(payload)


class TestDecodeV6Valid:
    """Reference 'valid' vector."""

    @pytest.fixture
    def record(self):
        return _decode(VALID)

    def test_environment(self, record):
        assert record.temperature == 29.5
        assert record.humidity == 55.3
        assert record.pressure == 101102.0

    def test_pm_2_5(self, record):
        assert record.pm2_5 == 11.2

    def test_co2(self, record):
        assert record.co2 == 201

    def test_voc_nox(self, record):
        assert record.voc_index == 10
        assert record.nox_index == 2

    def test_luminosity(self, record):
        assert record.luminosity == pytest.approx(13027.67, rel=1e-3)

    def test_sequence_and_flags(self, record):
        assert record.measurement_sequence == 205
        assert record.flags == 0

    def test_mac_suffix(self, record):
        assert record.mac_address == "4C:88:4F"


class TestDecodeV6Limits:

    def test_maximum(self):
        record = _decode(MAXIMUM)
        assert record.temperature == 163.835
        assert record.humidity == 100.0
        assert record.pressure == 115534.0
        assert record.pm2_5 == 1000.0
        assert record.co2 == 40000
        assert record.voc_index == 500
        assert record.nox_index == 500
        assert record.luminosity == 65535.0
        assert record.measurement_sequence == 255
        assert record.flags == 0x07
        assert record.mac_address == "4C:8F:4F"

    def test_minimum(self):
        record = _decode(MINIMUM)
        assert record.temperature == -163.835
        assert record.humidity == 0.0
        assert record.pressure == 50000.0
        assert record.pm2_5 == 0.0
        assert record.co2 == 0
        assert record.voc_index == 0
        assert record.nox_index == 0
        assert record.luminosity == 0.0
        assert record.measurement_sequence == 0


class TestDecodeV6Sentinels:
    """Each channel is independently absent."""

    def test_voc_nox_absent(self):
        record = decode_v6(_make_format6(voc=511, nox=511))
        assert record.voc_index is None
        assert record.nox_index is None
        assert record.co2 == 500

    def test_voc_odd(self):
        record = decode_v6(_make_format6(voc=129))
        assert record.voc_index == 129

    def test_nox_even(self):
        record = decode_v6(_make_format6(nox=64))
        assert record.nox_index == 64

    def test_luminosity_absent(self):
        record = decode_v6(_make_format6(luminosity_code=0xFF))
        assert record.luminosity is None

    def test_pm_absent(self):
        record = decode_v6(_make_format6(pm_2_5_raw=0xFFFF))
        assert record.pm2_5 is None
        assert record.co2 == 500

    def test_co2_absent(self):
        record = decode_v6(_make_format6(co2=0xFFFF))
        assert record.co2 is None

    def test_environment_sentinels(self):
        payload = bytearray(_make_format6())
        payload[1:7] = bytes.fromhex("8000FFFFFFFF")
        record = decode_v6(payload)
        assert record.temperature is None
        assert record.humidity is None
        assert record.pressure is None

    def test_mac_suffix_invalid(self):
        payload = bytearray(_make_format6())
        payload[17:20] = b"\xff\xff\xff"
        assert decode_v6(payload).mac_address == "invalid"


class TestDecodeLuminosity:

    def test_zero(self):
        assert decode_luminosity(0) == 0.0

    def test_max_code(self):
        assert decode_luminosity(254) == 65535.0

    def test_monotonic(self):
        values = [decode_luminosity(code) for code in range(255)]
        assert values == sorted(values)


class TestDecodeV6Errors:

    def test_wrong_length(self):
        with pytest.raises(InvalidLengthError) as exc:
            decode_v6(bytes.fromhex(VALID)[:17])
        assert exc.value.expected == 20
        assert exc.value.actual == 17

    def test_too_long(self):
        with pytest.raises(InvalidLengthError) as exc:
            _decode(VALID + "00")
        assert exc.value.expected == 20
        assert exc.value.actual == 21

    def test_e1_length_with_v6_format_byte(self):
        payload = bytes([0x06]) + bytes(39)
        with pytest.raises(InvalidLengthError) as exc:
            decode_v6(payload)
        assert exc.value.actual == 40

    def test_wrong_format_byte(self):
        with pytest.raises(UnsupportedFormatError) as exc:
            decode_v6(bytes([0x05] * 20))
        assert exc.value.data_format == 0x05
