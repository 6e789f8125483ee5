"""Tests for the immutable result records."""

import json
from dataclasses import FrozenInstanceError

import pytest

from rumble.core.models import AudioAnalysis
from rumble.utils.errors import InvalidInputError


def _analysis(**overrides):
    values = dict(
        average_volume=0.1,
        dominant_pitch=220.0,
        duration=1.5,
        pitch_coordinate=0.5,
        volume_coordinate=0.4,
    )
    values.update(overrides)
    return AudioAnalysis(**values)


class TestAudioAnalysis:
    def test_value_equality(self):
        assert _analysis() == _analysis()
        assert _analysis() != _analysis(duration=2.0)

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            _analysis().duration = 3.0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"average_volume": -0.1},
            {"dominant_pitch": -1.0},
            {"duration": 0.0},
            {"pitch_coordinate": 1.01},
            {"volume_coordinate": -0.01},
            {"volume_coordinate": float("inf")},
        ],
    )
    def test_rejects_invalid_fields(self, overrides):
        with pytest.raises(InvalidInputError):
            _analysis(**overrides)

    def test_average_volume_above_one_allowed(self):
        assert _analysis(average_volume=1.4).average_volume == 1.4

    def test_to_dict_field_names(self):
        assert set(_analysis().to_dict()) == {
            "averageVolume",
            "dominantPitch",
            "duration",
            "pitchCoordinate",
            "volumeCoordinate",
        }


class TestRumbleResult:
    def test_to_json(self, rumble_result):
        data = json.loads(rumble_result.to_json())
        assert data["flavour"]["id"] == "sea-salted"
        assert data["analysis"]["volumeCoordinate"] == 0.05
        assert data["audio_hash"] == "abc123hash"
        assert len(data["waveform"]) == 100

    def test_summary_names_flavour(self, rumble_result):
        assert rumble_result.get_summary().startswith("Sea Salted")
