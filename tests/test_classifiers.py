"""
Tests for the classifier entry points used by the extraction and rendering layers.
"""

from features.weather.services.classifiers import (
    alert_status,
    classify_air_quality,
    classify_uv,
    classify_wind
)

from conftest import BASE_TIME, HOUR, UTC


class TestClassifiers:
    """Test suite for the plain classifier functions."""

    def test_classify_wind(self):
        result = classify_wind(0.41)
        assert (result.category, result.label) == (1, "Light air")

    def test_classify_wind_invalid(self):
        result = classify_wind(-2)
        assert (result.category, result.label) == (-1, "Invalid wind speed")

    def test_classify_uv(self):
        assert classify_uv(2).label == "Low"
        assert classify_uv(11).category == 4

    def test_classify_air_quality(self):
        result = classify_air_quality(4, no2=500, pm10=10, o3=10, pm25=10)
        assert result.raw_index == 4
        assert result.category_label == "Poor"
        assert result.dominant_pollutant == "no2"

    def test_classify_air_quality_good(self):
        assert classify_air_quality(1, 999, 999, 999, 999).dominant_pollutant is None

    def test_alert_status_before(self):
        assert alert_status("Fog", BASE_TIME + HOUR, BASE_TIME + 2 * HOUR, BASE_TIME, UTC) == "Starts at 10:00"

    def test_alert_status_during(self):
        assert alert_status("Fog", BASE_TIME - HOUR, BASE_TIME + 2 * HOUR, BASE_TIME, UTC) == "Ends at 11:00"

    def test_alert_status_after(self):
        assert alert_status("Fog", BASE_TIME - 2 * HOUR, BASE_TIME - HOUR, BASE_TIME, UTC) == ""
