"""Extraction of the Ruuvi payload from a raw BLE advertisement.

An advertisement is a sequence of AD structures:
    [length] [type] [data: length - 1 bytes]

Ruuvi sensors broadcast their payload in a Manufacturer Specific Data
structure (type 0xFF) whose data starts with the company identifier 0x0499,
little-endian on the wire (99 04).
"""

import logging
from dataclasses import dataclass
from typing import Iterator

from .config import DUPLICATE_POLICIES, RUUVI_COMPANY_ID
from .errors import (
    AmbiguousAdvertisementError,
    NotFoundError,
    TruncatedAdvertisementError,
)

logger = logging.getLogger(__name__)

AD_TYPE_MANUFACTURER_DATA = 0xFF


@dataclass(frozen=True)
class AdStructure:
    """One AD structure of an advertisement."""

    offset: int
    ad_type: int
    data: bytes


def iter_ad_structures(advertisement: bytes) -> Iterator[AdStructure]:
    """Iterate the AD structures of an advertisement.

    A zero length byte ends the significant part; anything after it is
    padding.

    Raises:
        TruncatedAdvertisementError: If a structure runs past the end of the
            buffer. Structures before it have already been yielded.
    """
    advertisement = bytes(advertisement)
    idx = 0
    while idx < len(advertisement):
        length = advertisement[idx]
        if length == 0:
            break
        end = idx + 1 + length
        if end > len(advertisement):
            raise TruncatedAdvertisementError(end, len(advertisement))
        yield AdStructure(
            offset=idx,
            ad_type=advertisement[idx + 1],
            data=advertisement[idx + 2 : end],
        )
        idx = end


def _manufacturer_payload(ad: AdStructure, company_id: int) -> bytes | None:
    if ad.ad_type != AD_TYPE_MANUFACTURER_DATA or len(ad.data) < 2:
        return None
    if int.from_bytes(ad.data[:2], "little") != company_id:
        return None
    return ad.data[2:]


def extract_payload(
    advertisement: bytes,
    company_id: int = RUUVI_COMPANY_ID,
    duplicates: str = "first",
) -> bytes:
    """Return the Ruuvi payload carried by a BLE advertisement.

    Args:
        advertisement: Raw advertisement bytes
        company_id: Manufacturer identifier to look for
        duplicates: "first" returns the first matching structure, "error"
            scans the whole advertisement and rejects more than one match

    Raises:
        NotFoundError: If no structure carries the company identifier
        TruncatedAdvertisementError: If an AD structure is truncated
        AmbiguousAdvertisementError: If duplicates is "error" and several
            structures match
        ValueError: If duplicates is not a known policy
    """
    if duplicates not in DUPLICATE_POLICIES:
        raise ValueError(f"duplicates must be one of {DUPLICATE_POLICIES}, got {duplicates!r}")

    matches = []
    for ad in iter_ad_structures(advertisement):
        payload = _manufacturer_payload(ad, company_id)
        if payload is None:
            continue
        logger.debug(
            "Manufacturer data for 0x%04X at offset %d (%d bytes)",
            company_id,
            ad.offset,
            len(payload),
        )
        if duplicates == "first":
            return payload
        matches.append(payload)

    if not matches:
        raise NotFoundError(company_id)
    if len(matches) > 1:
        raise AmbiguousAdvertisementError(len(matches))
    return matches[0]
