"""Decode-related CLI commands."""

import json

from ruuvi_decoders.advertisement import extract_payload, iter_ad_structures
from ruuvi_decoders.config import load_config
from ruuvi_decoders.decoder import decode, parse_hex
from ruuvi_decoders.errors import DecodeError
from ruuvi_decoders.models import DATA_FORMAT_INFO, DataFormat, get_sensor_type

from ..ui import DIM, RESET, format_hex


def handle_decode(arg: str) -> None:
    """Decode an advertisement or payload. Usage: decode [json] <hex>"""
    parts = arg.split(None, 1)
    as_json = False
    hex_data = arg
    if parts and parts[0] == "json":
        as_json = True
        hex_data = parts[1] if len(parts) > 1 else ""

    if not hex_data.strip():
        print("Usage: decode [json] <hex>")
        return

    config = load_config()
    try:
        record = decode(hex_data, config.decoder)
    except DecodeError as e:
        print(f"Error: {e}")
        return

    if as_json:
        print(json.dumps(record.to_dict(), indent=2))
        return

    fmt = record.data_format
    print(f"{get_sensor_type(fmt)}/{record.mac_address}  {DIM}format {fmt.name}{RESET}")
    print(f"  {record.format_metrics()}")
    aqi = record.air_quality_index
    if aqi is not None:
        print(f"  AQI:{aqi:.0f}")


def handle_extract(arg: str) -> None:
    """List AD structures and the Ruuvi payload. Usage: extract <hex>"""
    if not arg.strip():
        print("Usage: extract <hex>")
        return

    config = load_config()
    try:
        raw = parse_hex(arg)
        for ad in iter_ad_structures(raw):
            print(f"  {ad.offset:3d}  type 0x{ad.ad_type:02X}  {format_hex(ad.data)}")
        payload = extract_payload(
            raw,
            company_id=config.decoder.company_id,
            duplicates=config.decoder.duplicates,
        )
    except DecodeError as e:
        print(f"Error: {e}")
        return

    print(f"\nPayload: {payload.hex().upper()}")


def do_formats(arg: str) -> None:
    """List known Ruuvi data formats."""
    print("Data formats\n")
    for format_id, (sensor_type, name) in DATA_FORMAT_INFO.items():
        supported = DataFormat.from_byte(format_id)
        if supported:
            print(f"  0x{format_id:02X}  {name:<12} {sensor_type:<4} {supported.payload_length} bytes")
        else:
            print(f"  {DIM}0x{format_id:02X}  {name:<12} {sensor_type:<4} not supported{RESET}")
