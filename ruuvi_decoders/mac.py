"""MAC address formatting."""

from .errors import InvalidLengthError

INVALID_MAC = "invalid"


def format_mac(data: bytes, length: int = 6) -> str:
    """Format MAC bytes as upper-case colon-separated hex.

    Returns "invalid" when every byte is 0xFF, which the sensors send when
    the address is not available. Data format 6 only carries the lowest
    three bytes, so callers pass `length=3` for it.
    """
    if len(data) != length:
        raise InvalidLengthError(length, len(data))
    if all(b == 0xFF for b in data):
        return INVALID_MAC
    return ":".join(f"{b:02X}" for b in data)
