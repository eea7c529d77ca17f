"""Decoder for Ruuvi BLE advertisement data.

Supports data formats 5 (RuuviTag RAWv2), 6 (Ruuvi Air BLE4) and
E1 (Ruuvi Air Extended).

Usage:
    record = decode("0512FC5394C37C0004FFFC040CAC364200CDCBB8334C884F")
    record = decode("0201061BFF99040512FC...")  # full advertisement
    record = decode("99040512FC...")  # company id + payload
    record = decode(payload_bytes)  # bare payload
"""

import logging
from typing import Callable

from .advertisement import extract_payload
from .config import DecoderConfig
from .e1 import decode_e1
from .errors import (
    DecodeError,
    InvalidHexError,
    InvalidLengthError,
    NotFoundError,
    TruncatedAdvertisementError,
    UnsupportedFormatError,
)
from .models import DataFormat, RuuviData
from .v5 import decode_v5
from .v6 import decode_v6

__all__ = [
    "decode",
    "decode_payload",
    "decode_v5",
    "decode_v6",
    "decode_e1",
    "extract_payload",
    "parse_hex",
]

logger = logging.getLogger(__name__)

DECODERS: dict[DataFormat, Callable[[bytes], RuuviData]] = {
    DataFormat.V5: decode_v5,
    DataFormat.V6: decode_v6,
    DataFormat.E1: decode_e1,
}


def parse_hex(text: str) -> bytes:
    """Convert a hex string to bytes.

    Surrounding whitespace, a 0x prefix and spaces between bytes are
    accepted.

    Raises:
        InvalidHexError: If the text is not an even number of hex digits
    """
    clean = text.strip()
    if clean[:2].lower() == "0x":
        clean = clean[2:]
    clean = clean.replace(" ", "")
    try:
        return bytes.fromhex(clean)
    except ValueError:
        raise InvalidHexError(text) from None


def decode_payload(payload: bytes) -> RuuviData:
    """Decode a bare Ruuvi payload, dispatching on its format byte.

    Raises:
        InvalidLengthError: If the payload is empty or its length does not
            match the format
        UnsupportedFormatError: If the format byte is not supported
    """
    if not payload:
        raise InvalidLengthError(message="Empty data")

    data_format = DataFormat.from_byte(payload[0])
    if data_format is None:
        raise UnsupportedFormatError(payload[0])

    logger.debug("Decoding %d byte payload as format %s", len(payload), data_format.name)
    return DECODERS[data_format](payload)


def _strip_company_id(raw: bytes, company_id: int) -> bytes:
    prefix = company_id.to_bytes(2, "little")
    if raw[:2] == prefix:
        return raw[2:]
    return raw


def decode(data: bytes | str, config: DecoderConfig | None = None) -> RuuviData:
    """Decode Ruuvi data.

    Args:
        data: Either raw bytes of a bare Ruuvi payload, or a hex string of a
            full BLE advertisement or a bare payload. For hex input the
            advertisement is tried first; if no Ruuvi structure can be
            extracted the buffer is decoded as a payload, with a leading
            little-endian company identifier stripped.
        config: Extraction settings, defaults to DecoderConfig()

    Raises:
        DecodeError: Subclass describing why the data could not be decoded
    """
    if not isinstance(data, str):
        return decode_payload(bytes(data))

    config = config or DecoderConfig()
    raw = parse_hex(data)
    try:
        payload = extract_payload(
            raw,
            company_id=config.company_id,
            duplicates=config.duplicates,
        )
    except (NotFoundError, TruncatedAdvertisementError) as e:
        logger.debug("Not an advertisement (%s), decoding as bare payload", e)
        try:
            return decode_payload(_strip_company_id(raw, config.company_id))
        except DecodeError as fallback:
            raise fallback from e

    return decode_payload(payload)
