"""
Tests for the urgency prioritizer
"""

import pytest

from conftest import make_weather
from harvestguard.core.urgency import determine_most_urgent_risk
from harvestguard.store.models import UrgentRisk
from harvestguard.utils.constants import URGENCY_HUMIDITY_MEDIUM_ALT


class TestSelection:
    """Highest tier wins, ties follow rain > heat > wind > humidity."""

    def test_rain_chance_high(self):
        risk = determine_most_urgent_risk(make_weather(rain_chance=85))
        assert risk == UrgentRisk(type="rain", severity="high", value=85)
        assert risk.basis == "chance"

    def test_rain_beats_heat_at_high(self):
        risk = determine_most_urgent_risk(make_weather(rain_chance=75, temperature=39))
        assert (risk.type, risk.severity) == ("rain", "high")

    def test_heat_beats_wind_at_high(self):
        risk = determine_most_urgent_risk(make_weather(temperature=38, wind_speed_ms=16))
        assert (risk.type, risk.severity) == ("heat", "high")

    def test_wind_beats_humidity_at_high(self):
        risk = determine_most_urgent_risk(make_weather(wind_speed_ms=15, humidity=91))
        assert (risk.type, risk.severity) == ("wind", "high")

    def test_wind_beats_humidity_at_medium(self):
        risk = determine_most_urgent_risk(make_weather(wind_speed_ms=10, humidity=85))
        assert (risk.type, risk.severity) == ("wind", "medium")

    def test_higher_tier_beats_priority(self):
        risk = determine_most_urgent_risk(make_weather(rain_chance=55, humidity=95))
        assert (risk.type, risk.severity) == ("humidity", "high")

    def test_medium_beats_low_heat(self):
        risk = determine_most_urgent_risk(make_weather(temperature=31, rain_chance=50))
        assert (risk.type, risk.severity) == ("rain", "medium")

    def test_nothing_crossing_is_none(self):
        assert determine_most_urgent_risk(make_weather()) is None
        assert determine_most_urgent_risk(None) is None


class TestTiers:
    """Per-type boundaries."""

    @pytest.mark.parametrize("temperature,severity", [(29.9, None), (30, "low"), (35, "medium"), (38, "high")])
    def test_heat(self, temperature, severity):
        risk = determine_most_urgent_risk(make_weather(temperature=temperature))
        assert (risk.severity if risk else None) == severity

    @pytest.mark.parametrize("chance,severity", [(49, None), (50, "medium"), (69, "medium"), (70, "high")])
    def test_rain_chance(self, chance, severity):
        risk = determine_most_urgent_risk(make_weather(rain_chance=chance))
        assert (risk.severity if risk else None) == severity

    @pytest.mark.parametrize("rainfall,severity", [(10, None), (20, "medium"), (50, "high")])
    def test_rainfall_amount_without_chance(self, rainfall, severity):
        risk = determine_most_urgent_risk(make_weather(rainfall_mm=rainfall))
        assert (risk.severity if risk else None) == severity
        if risk:
            assert risk.basis == "amount"

    def test_rain_chance_preferred_over_amount(self):
        risk = determine_most_urgent_risk(make_weather(rainfall_mm=80, rain_chance=10))
        assert risk is None

    @pytest.mark.parametrize("wind,severity", [(9.9, None), (10, "medium"), (15, "high")])
    def test_wind(self, wind, severity):
        risk = determine_most_urgent_risk(make_weather(wind_speed_ms=wind))
        assert (risk.severity if risk else None) == severity


class TestHumidityBoundary:
    """Medium humidity starts at 80 by default; 75 is selectable."""

    @pytest.mark.parametrize("humidity,severity", [(79, None), (80, "medium"), (89, "medium"), (90, "high")])
    def test_default_boundary(self, humidity, severity):
        risk = determine_most_urgent_risk(make_weather(humidity=humidity))
        assert (risk.severity if risk else None) == severity

    def test_alternative_boundary(self):
        weather = make_weather(humidity=76)
        assert determine_most_urgent_risk(weather) is None
        risk = determine_most_urgent_risk(weather, humidity_medium_threshold=URGENCY_HUMIDITY_MEDIUM_ALT)
        assert (risk.type, risk.severity) == ("humidity", "medium")
