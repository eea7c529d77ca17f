"""Data models for decoded Ruuvi advertisements."""

from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any, ClassVar, Literal, Union

from .air_quality import calc_aqi


class DataFormat(IntEnum):
    """Supported Ruuvi data formats, valued by their discriminator byte."""

    V5 = 5  # RAWv2, RuuviTag
    V6 = 6  # Ruuvi Air, BLE4 compatible
    E1 = 0xE1  # Ruuvi Air extended

    @property
    def payload_length(self) -> int:
        """Exact payload size in bytes, format byte and MAC included."""
        return PAYLOAD_LENGTHS[self]

    @classmethod
    def from_byte(cls, value: int) -> "DataFormat | None":
        try:
            return cls(value)
        except ValueError:
            return None


PAYLOAD_LENGTHS = {
    DataFormat.V5: 24,
    DataFormat.V6: 20,
    DataFormat.E1: 40,
}


# Ruuvi data format mapping: format_id -> (sensor_type, format_name)
# Includes formats that are recognized but not decoded.
DATA_FORMAT_INFO: dict[int, tuple[Literal["air", "tag", "unknown"], str]] = {
    3: ("tag", "RAWv1"),
    4: ("tag", "URL"),
    5: ("tag", "RAWv2"),
    6: ("air", "Format6"),
    8: ("tag", "Encrypted"),
    197: ("tag", "Cut-RAWv2"),  # 0xC5
    225: ("air", "ExtendedV1"),  # 0xE1
}


def get_sensor_type(data_format: int | None) -> Literal["air", "tag", "unknown"]:
    """Get sensor type from data format."""
    if data_format is None:
        return "unknown"
    info = DATA_FORMAT_INFO.get(data_format)
    return info[0] if info else "unknown"


class RecordMixin:
    """Serialization and display helpers shared by the record types."""

    data_format: ClassVar[DataFormat]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict tagged with the data format name."""
        return {"format": self.data_format.name, **asdict(self)}

    def format_metrics(self) -> str:
        """Format sensor metrics as a display string.

        Shows relevant fields based on the format:
        - All: Temperature, Humidity, Pressure
        - Air: CO2, PM2.5, VOC, NOx
        - Tag: Acceleration, Movement, Battery
        """
        parts = []
        temperature = getattr(self, "temperature", None)
        humidity = getattr(self, "humidity", None)
        pressure = getattr(self, "pressure", None)
        if temperature is not None:
            parts.append(f"T:{temperature:.1f}°C")
        if humidity is not None:
            parts.append(f"H:{humidity:.0f}%")
        if pressure is not None:
            parts.append(f"P:{pressure / 100:.0f}hPa")
        # Air quality fields
        co2 = getattr(self, "co2", None)
        pm2_5 = getattr(self, "pm2_5", None)
        voc = getattr(self, "voc_index", None)
        nox = getattr(self, "nox_index", None)
        if co2 is not None:
            parts.append(f"CO2:{co2}")
        if pm2_5 is not None:
            parts.append(f"PM2.5:{pm2_5:.1f}")
        if voc is not None:
            parts.append(f"VOC:{voc}")
        if nox is not None:
            parts.append(f"NOx:{nox}")
        # Tag motion/power fields
        acc = [getattr(self, f"acceleration_{axis}", None) for axis in "xyz"]
        if all(a is not None for a in acc):
            parts.append("Acc:" + ",".join(f"{a / 1000:.2f}" for a in acc))
        movement_counter = getattr(self, "movement_counter", None)
        battery_voltage = getattr(self, "battery_voltage", None)
        if movement_counter is not None:
            parts.append(f"Mov:{movement_counter}")
        if battery_voltage is not None:
            parts.append(f"Bat:{battery_voltage / 1000:.2f}V")
        return " ".join(parts)


@dataclass(frozen=True)
class V5Record(RecordMixin):
    """RuuviTag RAWv2 reading (data format 5).

    Ranges:
    - temperature: °C, -163.835..163.835
    - humidity: % RH, 0..163.835
    - pressure: Pa, 50000..115534
    - acceleration_x/y/z: mG, -32767..32767
    - battery_voltage: mV, 1600..3646
    - tx_power: dBm, -40..20
    """

    data_format: ClassVar[DataFormat] = DataFormat.V5

    temperature: float | None
    humidity: float | None
    pressure: float | None
    acceleration_x: int | None
    acceleration_y: int | None
    acceleration_z: int | None
    battery_voltage: int | None
    tx_power: int | None
    movement_counter: int
    measurement_sequence: int
    mac_address: str

    @property
    def air_quality_index(self) -> float | None:
        return None


@dataclass(frozen=True)
class V6Record(RecordMixin):
    """Ruuvi Air reading in the BLE4 compatible format 6."""

    data_format: ClassVar[DataFormat] = DataFormat.V6

    temperature: float | None  # °C
    humidity: float | None  # % RH
    pressure: float | None  # Pa
    pm2_5: float | None  # µg/m³
    co2: int | None  # ppm
    voc_index: int | None  # 0..500
    nox_index: int | None  # 0..500
    luminosity: float | None  # lux, logarithmic encoding
    measurement_sequence: int  # 8-bit, wraps
    flags: int
    mac_address: str  # lowest 3 bytes only

    @property
    def air_quality_index(self) -> float | None:
        if self.pm2_5 is None or self.co2 is None:
            return None
        return calc_aqi(self.pm2_5, self.co2)


@dataclass(frozen=True)
class E1Record(RecordMixin):
    """Ruuvi Air reading in the extended format E1."""

    data_format: ClassVar[DataFormat] = DataFormat.E1

    temperature: float | None  # °C
    humidity: float | None  # % RH
    pressure: float | None  # Pa
    pm1_0: float | None  # µg/m³
    pm2_5: float | None  # µg/m³
    pm4_0: float | None  # µg/m³
    pm10_0: float | None  # µg/m³
    co2: int | None  # ppm
    voc_index: int | None
    nox_index: int | None
    luminosity: float | None  # lux
    measurement_sequence: int | None  # 24-bit
    flags: int
    mac_address: str

    @property
    def air_quality_index(self) -> float | None:
        if self.pm2_5 is None or self.co2 is None:
            return None
        return calc_aqi(self.pm2_5, self.co2)


RuuviData = Union[V5Record, V6Record, E1Record]
