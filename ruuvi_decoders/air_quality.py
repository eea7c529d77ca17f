"""Air quality index for Ruuvi Air readings.

The index combines PM2.5 and CO₂ into a single 0-100 score, 100 being the
best. Each input is clamped to its range and mapped to 0-100; the score is
100 minus the distance of that point from the origin.
"""

import math

AQI_MAX = 100.0
PM25_MIN = 0.0
PM25_MAX = 60.0  # µg/m³
CO2_MIN = 420.0
CO2_MAX = 2300.0  # ppm

PM25_SCALE = AQI_MAX / (PM25_MAX - PM25_MIN)
CO2_SCALE = AQI_MAX / (CO2_MAX - CO2_MIN)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def calc_aqi(pm25: float, co2: float) -> float:
    """Calculate the air quality index from PM2.5 (µg/m³) and CO₂ (ppm)."""
    pm25 = _clamp(pm25, PM25_MIN, PM25_MAX)
    co2 = _clamp(co2, CO2_MIN, CO2_MAX)

    dx = (pm25 - PM25_MIN) * PM25_SCALE
    dy = (co2 - CO2_MIN) * CO2_SCALE

    return _clamp(AQI_MAX - math.hypot(dx, dy), 0.0, AQI_MAX)
