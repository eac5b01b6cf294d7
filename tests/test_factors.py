"""
Tests for the risk factor analyzer and crop batch state
"""

from datetime import timedelta

import pytest

from conftest import TODAY, growing_crop, harvested_crop, make_weather
from harvestguard.core.factors import (
    NO_RISK,
    assess,
    calculate_growing_risk,
    calculate_storage_risk,
    determine_overall_risk,
)
from harvestguard.store.models import CropBatchState, RiskAssessment
from harvestguard.utils.errors import CropStateError


def _types(assessment):
    return [f.type for f in assessment.factors]


class TestStorageRisk:
    """Harvested crops in storage."""

    def test_open_space_extreme_heat_and_humidity(self):
        crop = harvested_crop(storage="open_space")
        assessment = calculate_storage_risk(crop, make_weather(humidity=95, temperature=45))

        # (35 + 30) x 1.5 = 97.5, rounded half up
        assert assessment.score == 98
        assert assessment.level == "Critical"
        assert _types(assessment) == ["humidity", "temperature", "storage"]
        assert "humidity" in assessment.primary_threat.lower()
        storage = next(f for f in assessment.factors if f.type == "storage")
        assert storage.severity == 50

    def test_evaluates_all_weather_factors_in_order(self):
        weather = make_weather(humidity=86, temperature=36, rainfall_mm=60, wind_speed_ms=16)
        assessment = calculate_storage_risk(harvested_crop(storage="jute_bag"), weather)

        assert _types(assessment) == ["humidity", "temperature", "rainfall", "wind", "storage"]
        assert [f.severity for f in assessment.factors] == [75, 50, 50, 75, 20]

    def test_primary_threat_tie_goes_to_earlier_factor(self):
        weather = make_weather(humidity=86, wind_speed_ms=16)
        assessment = calculate_storage_risk(harvested_crop(storage="silo"), weather)
        assert assessment.primary_factor.type == "humidity"
        assert assessment.primary_threat.startswith("High humidity")

    @pytest.mark.parametrize("humidity,severity", [(60, 25), (70, 50), (79, 50), (80, 75), (89, 75), (90, 100)])
    def test_humidity_severity_bands(self, humidity, severity):
        assessment = calculate_storage_risk(harvested_crop(storage="silo"), make_weather(humidity=humidity))
        assert [(f.type, f.severity) for f in assessment.factors] == [("humidity", severity)]

    @pytest.mark.parametrize("storage,severity", [("tin_shed", 10), ("jute_bag", 20), ("open_space", 50)])
    def test_storage_factor_severity(self, storage, severity):
        assessment = calculate_storage_risk(harvested_crop(storage=storage), make_weather())
        assert assessment.factors[-1].type == "storage"
        assert assessment.factors[-1].severity == severity

    def test_silo_adds_no_storage_factor(self):
        assessment = calculate_storage_risk(harvested_crop(storage="silo"), make_weather())
        assert assessment.factors == []
        assert assessment.level == "Low"
        assert assessment.primary_threat == NO_RISK


class TestGrowingRisk:
    """Crops still in the field."""

    @pytest.mark.parametrize("days_out,expected", [(5, True), (7, True), (1, True), (0, False), (-3, False), (10, False)])
    def test_harvest_timing_window(self, days_out, expected):
        assessment = calculate_growing_risk(growing_crop(days_out=days_out), make_weather(), today=TODAY)
        assert ("harvest_timing" in _types(assessment)) is expected

    def test_harvest_timing_severity(self):
        assessment = calculate_growing_risk(growing_crop(days_out=3), make_weather(), today=TODAY)
        assert assessment.factors == [assessment.primary_factor]
        assert assessment.factors[0].severity == 50
        assert "3 days" in assessment.primary_threat

    def test_no_storage_factor_for_growing(self):
        assessment = calculate_growing_risk(growing_crop(), make_weather(humidity=95))
        assert _types(assessment) == ["humidity"]

    def test_no_factors_is_low(self):
        assessment = calculate_growing_risk(growing_crop(), make_weather())
        assert assessment.level == "Low"
        assert assessment.factors == []
        assert assessment.primary_threat == NO_RISK


class TestAssess:
    """Dispatch by stage and conservative fallbacks."""

    def test_dispatches_by_stage(self):
        weather = make_weather(humidity=95)
        assert "storage" in _types(assess(harvested_crop(), weather))
        assert "storage" not in _types(assess(growing_crop(), weather))

    def test_missing_weather_is_medium(self):
        assessment = assess(growing_crop(), None)
        assert assessment.level == "Medium"
        assert assessment.crop_id == "c1"

    def test_missing_crop_is_medium(self):
        assert assess(None, make_weather()).level == "Medium"
        assert calculate_storage_risk(None, make_weather()).level == "Medium"


class TestOverallRisk:
    """Max level across assessments."""

    @staticmethod
    def _assessment(level):
        return RiskAssessment(level=level, score=0)

    def test_empty_is_low(self):
        assert determine_overall_risk([]) == "Low"

    def test_max_level_wins(self):
        assert determine_overall_risk([self._assessment("Critical"), self._assessment("High")]) == "Critical"
        assert determine_overall_risk([self._assessment("Low"), self._assessment("Medium")]) == "Medium"
        assert determine_overall_risk([self._assessment("High"), self._assessment("Low")]) == "High"


class TestCropBatchState:
    """Stage invariants and the harvest transition."""

    def test_growing_rejects_storage_fields(self):
        with pytest.raises(CropStateError):
            CropBatchState(crop_id="x", crop_type="ধান", stage="growing", storage_method="silo")

    def test_harvested_rejects_expected_date(self):
        with pytest.raises(CropStateError):
            CropBatchState(
                crop_id="x", crop_type="ধান", stage="harvested",
                storage_method="silo", expected_harvest_date=TODAY,
            )

    def test_harvested_requires_storage_method(self):
        with pytest.raises(CropStateError):
            CropBatchState(crop_id="x", crop_type="ধান", stage="harvested")

    def test_harvest_is_one_way(self):
        crop = growing_crop(days_out=2)
        assert crop.harvest("jute_bag", on=TODAY + timedelta(days=2)) is crop

        assert crop.stage == "harvested"
        assert crop.expected_harvest_date is None
        assert crop.storage_method == "jute_bag"
        with pytest.raises(CropStateError):
            crop.harvest("silo")

    def test_from_dict_drops_cross_stage_fields(self):
        crop = CropBatchState.from_dict({
            "_id": "abc",
            "cropType": "ধান",
            "stage": "harvested",
            "storageLocation": "tin_shed",
            "expectedHarvestDate": "2026-02-01",
        })
        assert crop.storage_method == "tin_shed"
        assert crop.expected_harvest_date is None
