"""Ruuvi Gateway event messages.

The gateway relays every advertisement it hears as a JSON message (over MQTT
or HTTP):

{
    "gw_mac": "AA:BB:CC:DD:EE:FF",
    "rssi": -36,
    "aoa": [],
    "gwts": 1735664400,
    "ts": 1735664399,
    "data": "2BFF9904E1125356ECB857...",
    "coords": ""
}
"""

import json
from dataclasses import dataclass, field

from .config import DecoderConfig
from .decoder import decode
from .errors import InvalidEventError
from .models import RuuviData


@dataclass
class GatewayEvent:
    """An advertisement relayed by a Ruuvi Gateway."""

    gw_mac: str
    rssi: int
    data: str  # raw advertisement hex
    aoa: list[float] = field(default_factory=list)
    gwts: int | None = None  # seconds since epoch, gateway clock
    ts: int | None = None  # seconds since epoch, reception time
    coords: str | None = None

    def decode(self, config: DecoderConfig | None = None) -> RuuviData:
        """Decode the relayed advertisement."""
        return decode(self.data, config)


def _optional_int(data: dict, key: str) -> int | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidEventError(f"Field {key!r} is not an integer: {value!r}") from None


def parse_gateway_event(payload: bytes | str) -> GatewayEvent:
    """Parse a gateway JSON message into a GatewayEvent.

    Raises:
        InvalidEventError: If the message is not a JSON object or has no
            advertisement data
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidEventError(f"Invalid JSON: {e}") from None

    if not isinstance(data, dict):
        raise InvalidEventError("Event is not a JSON object")

    raw_data = data.get("data")
    if not raw_data or not isinstance(raw_data, str):
        raise InvalidEventError("Event has no advertisement data")

    return GatewayEvent(
        gw_mac=data.get("gw_mac", ""),
        rssi=_optional_int(data, "rssi") or 0,
        data=raw_data,
        aoa=list(data.get("aoa") or []),
        gwts=_optional_int(data, "gwts"),
        ts=_optional_int(data, "ts"),
        coords=data.get("coords") or None,
    )
