"""Tests for MCP server tool responses."""

from unittest.mock import patch

import pytest

from ruuvi_decoders.config import DecoderConfig
from ruuvi_decoders_mcp import server
from ruuvi_decoders_mcp.server import (
    decode_data,
    extract_manufacturer_data,
    get_guide,
    list_formats,
)

V5_PAYLOAD = "0512FC5394C37C0004FFFC040CAC364200CDCBB8334C884F"
V5_ADVERTISEMENT = "0201061BFF9904" + V5_PAYLOAD
V6_PAYLOAD = "06170C5668C79E007000C90501D9FFCD004C884F"
E1_PAYLOAD = "E1170C5668C79E0065007004BD11CA00C90A0213E0AC000000DECDEE100000000000CBB8334C884F"


class TestDecodeData:
    """Test decode_data tool output."""

    def test_tag_fields(self):
        result = decode_data(V5_ADVERTISEMENT)

        assert result["format"] == "V5"
        assert result["temperature"] == 24.3
        assert result["humidity"] == 53.49
        assert result["pressure"] == 100044.0
        assert result["acceleration_z"] == 1036
        assert result["battery_voltage"] == 2977
        assert result["tx_power"] == 4
        assert result["mac_address"] == "CB:B8:33:4C:88:4F"

    def test_tag_has_no_aqi(self):
        assert "air_quality_index" not in decode_data(V5_PAYLOAD)

    def test_air_fields(self):
        result = decode_data(E1_PAYLOAD)

        assert result["format"] == "E1"
        assert result["pm1_0"] == 10.1
        assert result["pm2_5"] == 11.2
        assert result["co2"] == 201
        assert result["voc_index"] == 20
        assert result["nox_index"] == 4
        assert result["luminosity"] == 13027.0

    def test_air_quality_index(self):
        assert decode_data(V6_PAYLOAD)["air_quality_index"] == 81.3

    def test_aqi_none_without_co2(self):
        payload = bytearray.fromhex(V6_PAYLOAD)
        payload[9:11] = b"\xff\xff"
        result = decode_data(payload.hex())
        assert result["co2"] is None
        assert result["air_quality_index"] is None

    def test_unsupported_format(self):
        result = decode_data("63" + "00" * 23)
        assert result["error"] == "UnsupportedFormatError"
        assert "0x63" in result["message"]

    def test_invalid_length(self):
        result = decode_data(V5_PAYLOAD[:-2])
        assert result["error"] == "InvalidLengthError"

    def test_invalid_hex(self):
        assert decode_data("xyz")["error"] == "InvalidHexError"

    def test_uses_server_config(self):
        adv = V5_ADVERTISEMENT + "05FF990405AA"
        with patch.object(server.config, "decoder", DecoderConfig(duplicates="error")):
            result = decode_data(adv)
        assert result["error"] == "AmbiguousAdvertisementError"


class TestExtractManufacturerData:
    """Test extract_manufacturer_data tool output."""

    def test_structures_and_payload(self):
        result = extract_manufacturer_data(V5_ADVERTISEMENT)

        assert result["payload"] == V5_PAYLOAD
        assert result["structures"] == [
            {"offset": 0, "type": "0x01", "data": "06"},
            {"offset": 3, "type": "0xFF", "data": "9904" + V5_PAYLOAD},
        ]

    def test_lowercase_input(self):
        result = extract_manufacturer_data(V5_ADVERTISEMENT.lower())
        assert result["payload"] == V5_PAYLOAD

    def test_not_found(self):
        result = extract_manufacturer_data("020106030316910255AA")
        assert result["error"] == "NotFoundError"

    def test_truncated(self):
        result = extract_manufacturer_data("02010603031691FF99")
        assert result["error"] == "TruncatedAdvertisementError"


class TestListFormats:
    """Test list_formats tool output."""

    @pytest.fixture
    def formats(self):
        return {f["id"]: f for f in list_formats()["formats"]}

    def test_supported(self, formats):
        assert formats[5]["supported"] is True
        assert formats[5]["payload_length"] == 24
        assert formats[6]["payload_length"] == 20
        assert formats[225]["payload_length"] == 40
        assert formats[225]["hex"] == "0xE1"

    def test_recognized_only(self, formats):
        assert formats[3]["supported"] is False
        assert formats[3]["payload_length"] is None
        assert formats[3]["name"] == "RAWv1"

    def test_sensor_type(self, formats):
        assert formats[5]["sensor_type"] == "tag"
        assert formats[225]["sensor_type"] == "air"


class TestGuide:

    def test_mentions_formats(self):
        guide = get_guide()
        assert "RAWv2" in guide
        assert "E1" in guide
        assert "Pa" in guide
