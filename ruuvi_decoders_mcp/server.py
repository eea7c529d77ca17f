"""MCP server for decoding Ruuvi BLE advertisements.

Lets AI clients turn raw advertisement hex (from a gateway, a scanner log or
a bug report) into readable sensor values.

Tools:
- decode_data(): Decode an advertisement or bare payload
- extract_manufacturer_data(): Show the Ruuvi payload inside an advertisement
- list_formats(): Supported data formats and their payload sizes
"""

import logging

from mcp.server.fastmcp import FastMCP

from ruuvi_decoders.advertisement import extract_payload, iter_ad_structures
from ruuvi_decoders.config import load_config
from ruuvi_decoders.decoder import decode, parse_hex
from ruuvi_decoders.errors import DecodeError
from ruuvi_decoders.models import DATA_FORMAT_INFO, DataFormat

mcp = FastMCP(name="Ruuvi Decoders")
config = load_config()

logger = logging.getLogger(__name__)


@mcp.resource("ruuvi://formats")
def get_guide() -> str:
    """Guide to Ruuvi data formats and decoded fields."""
    return """# Ruuvi Data Formats

## Input
Pass either a full BLE advertisement (e.g. "0201061BFF9904...") or the bare
Ruuvi payload starting with the format byte (e.g. "0512FC...").

## Formats
- 5 (RAWv2): RuuviTag. Temperature, humidity, pressure, acceleration,
  battery voltage, TX power, movement counter, sequence, MAC.
- 6: Ruuvi Air (BLE4). Adds PM2.5, CO2, VOC, NOx, luminosity. MAC holds
  only the lowest 3 bytes.
- E1 (225): Ruuvi Air extended. PM1.0, PM2.5, PM4.0, PM10.0, CO2, VOC,
  NOx, luminosity, 24-bit sequence, full MAC.

## Units
- temperature: °C
- humidity: % RH
- pressure: Pa (divide by 100 for hPa)
- acceleration: mG
- battery_voltage: mV
- tx_power: dBm
- pm*: µg/m³
- co2: ppm
- voc_index, nox_index: index 0-500
- luminosity: lux

A null value means the sensor reported the reading as unavailable.
"""


def _error(e: DecodeError) -> dict:
    return {"error": type(e).__name__, "message": str(e)}


@mcp.tool()
def decode_data(data: str) -> dict:
    """Decode a Ruuvi advertisement or payload given as hex.

    Args:
        data: Hex string of a full BLE advertisement or a bare Ruuvi payload

    Returns:
        Decoded fields tagged with "format", plus "air_quality_index" for
        Ruuvi Air formats. On failure, {"error": ..., "message": ...}.
    """
    try:
        record = decode(data, config.decoder)
    except DecodeError as e:
        logger.info("Decode failed: %s", e)
        return _error(e)

    result = record.to_dict()
    if record.data_format is not DataFormat.V5:
        aqi = record.air_quality_index
        result["air_quality_index"] = round(aqi, 1) if aqi is not None else None
    return result


@mcp.tool()
def extract_manufacturer_data(advertisement: str) -> dict:
    """Split an advertisement into AD structures and extract the Ruuvi payload.

    Args:
        advertisement: Hex string of a full BLE advertisement

    Returns:
        {"structures": [{"offset", "type", "data"}...], "payload": hex}
        or {"error": ..., "message": ...}
    """
    try:
        raw = parse_hex(advertisement)
        structures = [
            {"offset": ad.offset, "type": f"0x{ad.ad_type:02X}", "data": ad.data.hex().upper()}
            for ad in iter_ad_structures(raw)
        ]
        payload = extract_payload(
            raw,
            company_id=config.decoder.company_id,
            duplicates=config.decoder.duplicates,
        )
    except DecodeError as e:
        return _error(e)

    return {"structures": structures, "payload": payload.hex().upper()}


@mcp.tool()
def list_formats() -> dict:
    """List Ruuvi data formats, which are decodable, and their payload sizes."""
    formats = []
    for format_id, (sensor_type, name) in DATA_FORMAT_INFO.items():
        supported = DataFormat.from_byte(format_id)
        formats.append({
            "id": format_id,
            "hex": f"0x{format_id:02X}",
            "name": name,
            "sensor_type": sensor_type,
            "supported": supported is not None,
            "payload_length": supported.payload_length if supported else None,
        })
    return {"formats": formats}


def main():
    """Run the MCP server."""
    logging.basicConfig(level=config.logging.level)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
