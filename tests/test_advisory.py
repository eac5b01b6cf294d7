"""
Tests for advisory synthesis, localized numbers and action items
"""

from datetime import datetime, timedelta

import pytest

from conftest import TODAY, growing_crop, harvested_crop, make_weather
from harvestguard.core.actions import MAX_ACTIONS, MIN_ACTIONS, generate_action_items
from harvestguard.core.advisory import (
    calculate_days_until_harvest,
    format_number,
    synthesize,
    to_local_digits,
)
from harvestguard.core.factors import assess
from harvestguard.core.templates import TITLES
from harvestguard.store.models import UrgentRisk


class TestDaysUntilHarvest:
    """Whole days, never negative."""

    def test_past_date_is_zero(self):
        assert calculate_days_until_harvest(TODAY - timedelta(days=5), today=TODAY) == 0

    def test_today_is_zero(self):
        assert calculate_days_until_harvest(TODAY, today=TODAY) == 0

    def test_future_date(self):
        assert calculate_days_until_harvest(TODAY + timedelta(days=10), today=TODAY) == 10

    def test_missing_or_invalid(self):
        assert calculate_days_until_harvest(None, today=TODAY) is None
        assert calculate_days_until_harvest("not-a-date", today=TODAY) is None

    def test_accepts_strings_and_datetimes(self):
        assert calculate_days_until_harvest("2026-03-04", today=TODAY) == 3
        assert calculate_days_until_harvest("2026-03-04T18:30:00Z", today=TODAY) == 3
        assert calculate_days_until_harvest(datetime(2026, 3, 2, 23, 0), today=TODAY) == 1


class TestNumbers:
    """Locale digit systems."""

    def test_bangla_digits(self):
        assert to_local_digits("95", "bn") == "৯৫"
        assert to_local_digits("95", "en") == "95"

    def test_format_number(self):
        assert format_number(36.5, "bn") == "৩৭"
        assert format_number(32.5, "en", 1) == "32.5"
        assert format_number(45.0, "bn", 1) == "৪৫"


class TestUrgentAdvisory:
    """Area-wide and crop-context messages."""

    def test_area_wide_rain(self):
        advisory = synthesize(UrgentRisk("rain", "high", 85, basis="chance"), language="bn")

        assert advisory.type == "rain"
        assert advisory.severity == "high"
        assert advisory.title == TITLES["bn"]["rain"]["high"]
        assert "৮৫%" in advisory.message
        assert "→" in advisory.message
        assert advisory.key == f"rain-high-{TITLES['bn']['rain']['high']}"
        assert advisory.conditions == {"rain_chance": 85}

    def test_harvest_soon_message(self):
        crop = growing_crop(days_out=3)
        advisory = synthesize(UrgentRisk("rain", "high", 85, basis="chance"), crop, "bn", today=TODAY)
        assert advisory.message == "আগামী ৩ দিনে বৃষ্টি ৮৫% → আজই ধান কাটুন অথবা ঢেকে রাখুন"

    def test_growing_message_in_english(self):
        crop = growing_crop(days_out=30, crop_type="rice")
        advisory = synthesize(UrgentRisk("heat", "medium", 36.4), crop, "en", today=TODAY)
        assert advisory.message == "Temperature 36°C → Irrigate the rice field regularly"
        assert advisory.title == "High Temperature Alert"
        assert advisory.actions[0] == "Increase irrigation frequency"

    def test_stored_crop_message(self):
        crop = harvested_crop(storage="open_space", crop_type="Rice")
        advisory = synthesize(UrgentRisk("rain", "high", 85, basis="chance"), crop, "en")
        assert advisory.message == "Heavy rain 85% → Cover the Rice stored in open space and keep water out"
        assert advisory.crop_id == "h1"

    def test_stored_crop_message_in_bangla(self):
        crop = harvested_crop(storage="jute_bag")
        advisory = synthesize(UrgentRisk("humidity", "medium", 82), crop, "bn")
        assert "পাটের বস্তা" in advisory.message
        assert "ধান" in advisory.message
        assert "৮২%" in advisory.message

    def test_rainfall_amount_unit(self):
        advisory = synthesize(UrgentRisk("rain", "medium", 25, basis="amount"), language="en")
        assert "25mm" in advisory.message
        assert advisory.conditions == {"rainfall_mm": 25}

    def test_synthesis_is_idempotent(self):
        risk = UrgentRisk("wind", "high", 16)
        assert synthesize(risk, language="bn").key == synthesize(risk, language="bn").key

    def test_unknown_language_falls_back_to_english(self):
        advisory = synthesize(UrgentRisk("humidity", "high", 92), language="fr")
        assert advisory.language == "en"
        assert advisory.title == "Severe Humidity Warning"


class TestAssessmentAdvisory:
    """Advisories built from crop assessments."""

    def test_critical_storage_advisory(self):
        crop = harvested_crop(storage="open_space")
        weather = make_weather(humidity=95, temperature=45)
        advisory = synthesize(assess(crop, weather), crop, "bn", weather=weather)

        assert advisory.type == "humidity"
        assert advisory.severity == "high"
        assert advisory.level == "Critical"
        assert advisory.crop_id == "h1"
        assert "খোলা জায়গা" in advisory.message
        assert "আর্দ্রতা ৯৫%" in advisory.message
        assert advisory.actions[0] == "জরুরি: ফসল অবিলম্বে শুকিয়ে নিন"
        assert MIN_ACTIONS <= len(advisory.actions) <= MAX_ACTIONS
        assert advisory.conditions["score"] == 98

    def test_growing_advisory_mentions_harvest(self):
        crop = growing_crop(days_out=4, crop_type="rice")
        weather = make_weather(humidity=91, temperature=36)
        advisory = synthesize(assess(crop, weather, today=TODAY), crop, "en", weather=weather, today=TODAY)

        assert advisory.severity == "medium"
        assert "Harvest is due in 4 days." in advisory.message
        assert "rice" in advisory.message

    def test_level_maps_to_severity(self):
        crop = growing_crop()
        weather = make_weather(humidity=95, temperature=42, rainfall_mm=60)
        assessment = assess(crop, weather)
        assert assessment.level == "High"
        assert synthesize(assessment, crop, "en", weather=weather).severity == "high"

    def test_no_factors_is_general(self):
        crop = growing_crop()
        weather = make_weather()
        advisory = synthesize(assess(crop, weather), crop, "en", weather=weather)
        assert advisory.type == "general"
        assert advisory.severity == "low"


class TestActionItems:
    """Priority ordering and count bounds."""

    def test_minimum_two_actions(self):
        actions = generate_action_items(growing_crop(), make_weather(), "Low", "en")
        assert actions == ["Keep watching the weather forecast", "Check crop health regularly"]

    def test_capped_at_five_and_unique(self):
        weather = make_weather(humidity=95, temperature=40, rainfall_mm=60, wind_speed_ms=20)
        actions = generate_action_items(harvested_crop(storage="open_space"), weather, "Critical", "bn")
        assert len(actions) == MAX_ACTIONS
        assert len(set(actions)) == len(actions)
        assert actions[:2] == ["জরুরি: ফসল অবিলম্বে শুকিয়ে নিন", "ফসল তাড়াতাড়ি ঢেকে রাখুন বা নিরাপদ স্থানে সরান"]

    def test_missing_inputs_still_give_two(self):
        assert len(generate_action_items(None, None, "Medium", "bn")) == MIN_ACTIONS

    @pytest.mark.parametrize("language", ["bn", "en"])
    def test_growing_rain_actions(self, language):
        actions = generate_action_items(growing_crop(), make_weather(rainfall_mm=60), "Medium", language)
        expected = "Drain standing water from the field" if language == "en" else "জমিতে পানি নিষ্কাশনের ব্যবস্থা করুন"
        assert actions[0] == expected
