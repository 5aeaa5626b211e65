"""Tests for the intensity scale and the canonical event model."""

from __future__ import annotations

from datetime import datetime

import pydantic
import pytest

from pyquake.models.event import SeismicEvent
from pyquake.models.scale import UNKNOWN_LABEL, IntensityScale, to_intensity_label

# ------------------------------------------------------------------
# IntensityScale
# ------------------------------------------------------------------


class TestIntensityScale:
    EXPECTED = {
        10: "1",
        20: "2",
        30: "3",
        40: "4",
        45: "5-",
        50: "5+",
        55: "6-",
        60: "6+",
        70: "7",
    }

    def test_known_codes(self) -> None:
        for code, label in self.EXPECTED.items():
            assert to_intensity_label(code) == label

    def test_unknown_value_falls_back(self) -> None:
        assert IntensityScale(99) == IntensityScale.UNKNOWN

    @pytest.mark.parametrize("code", [-1, 0, 5, 46, 65, 71, 100, 10_000, -10_000])
    def test_unmapped_codes_are_unknown(self, code: int) -> None:
        assert to_intensity_label(code) == UNKNOWN_LABEL

    def test_only_nine_codes_are_mapped(self) -> None:
        mapped = [code for code in range(-200, 201) if to_intensity_label(code) != UNKNOWN_LABEL]
        assert mapped == sorted(self.EXPECTED)

    def test_enum_has_unknown_member(self) -> None:
        assert IntensityScale.UNKNOWN == -1
        assert IntensityScale.UNKNOWN.label == "Unknown"


# ------------------------------------------------------------------
# SeismicEvent
# ------------------------------------------------------------------


def _event(**overrides: object) -> SeismicEvent:
    fields: dict[str, object] = {
        "id": "x",
        "occurred_at": datetime(2024, 1, 1, 12, 0, 0),
        "epicenter_name": "Tokyo",
        "latitude": 35.6,
        "longitude": 139.7,
        "magnitude": 5.2,
        "depth_km": 30,
        "max_intensity_label": "5+",
        "affected_areas": ("Chiyoda: 5+",),
    }
    fields.update(overrides)
    return SeismicEvent(**fields)


class TestSeismicEvent:
    def test_is_frozen(self) -> None:
        event = _event()
        with pytest.raises(pydantic.ValidationError):
            event.magnitude = 7.0  # type: ignore[misc]

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            _event(tsunami=True)

    def test_affected_areas_default_empty(self) -> None:
        event = SeismicEvent(
            id="y",
            occurred_at=datetime(2024, 1, 1),
            epicenter_name="Sea",
            latitude=0.0,
            longitude=0.0,
            magnitude=-1.0,
            depth_km=-1,
            max_intensity_label="Unknown",
        )
        assert event.affected_areas == ()

    def test_display_helpers(self) -> None:
        event = _event(depth_km=0)
        assert event.formatted_time == "2024/01/01 12:00:00"
        assert event.formatted_magnitude == "5.2"
        assert event.formatted_depth == "0 km"

    def test_negative_depth_allowed(self) -> None:
        assert _event(depth_km=-1).depth_km == -1
