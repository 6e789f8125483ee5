"""Tests for RumbleEngine orchestration."""

from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest

from rumble.core.classifier import FlavourClassifier
from rumble.core.engine import RumbleEngine, create_engine
from rumble.core.features import FeatureExtractor
from rumble.core.models import DecodedAudio, RumbleResult
from rumble.utils.config import get_default_config
from rumble.utils.errors import ConfigurationError, InvalidInputError


@pytest.fixture
def engine():
    with create_engine(get_default_config()) as engine:
        yield engine


class TestAnalyze:
    def test_silent_file_end_to_end(self, engine, silent_wav):
        result = engine.analyze(silent_wav)

        assert isinstance(result, RumbleResult)
        assert result.flavour.id == "sea-salted"
        assert result.analysis.to_dict() == {
            "averageVolume": 0.0,
            "dominantPitch": 0.0,
            "duration": 0.125,
            "pitchCoordinate": 0.0,
            "volumeCoordinate": 0.05,
        }
        assert result.file_path == silent_wav
        assert result.audio_hash is not None
        assert result.waveform.shape == (100,)

    def test_loud_low_rumble_is_beefy(self, engine, loud_low_wav):
        assert engine.analyze(loud_low_wav).flavour.id == "beefy"

    def test_media_type_passed_to_loader(self):
        loader = MagicMock()
        loader.load.return_value = DecodedAudio(
            file_path=Path("clip.m4a"),
            file_hash="h",
            media_type="audio/mp4",
            samples=np.zeros(200, dtype=np.float32),
            sample_rate=8000,
            duration=0.025,
        )
        with RumbleEngine(loader, FeatureExtractor(), FlavourClassifier()) as engine:
            result = engine.analyze(Path("clip.m4a"), media_type="audio/mp4")

        loader.load.assert_called_once_with(Path("clip.m4a"), media_type="audio/mp4")
        assert result.analysis.duration == 0.025
        assert result.audio_hash == "h"


class TestAnalyzeSamples:
    def test_already_decoded_samples(self, engine):
        result = engine.analyze_samples([0.0] * 1000, 8000)
        assert result.flavour.id == "sea-salted"
        assert result.file_path is None
        assert result.analysis.duration == 0.125

    def test_empty_samples(self, engine):
        with pytest.raises(InvalidInputError):
            engine.analyze_samples([], 8000)

    def test_waveform_points_from_config(self):
        config = get_default_config()
        config["waveform"]["points"] = 10
        with create_engine(config) as engine:
            result = engine.analyze_samples(np.linspace(-1, 1, 1000), 8000)
        assert len(result.waveform) == 10

    def test_clip_shorter_than_waveform_keeps_classification(self, engine):
        samples = np.zeros(50)
        result = engine.analyze_samples(samples, 8000)

        assert result.analysis == FeatureExtractor().extract(samples, 8000)
        assert result.flavour.id == "sea-salted"
        assert result.waveform.shape == (50,)
        assert np.all(result.waveform == 0.0)

    def test_single_sample_clip(self, engine):
        result = engine.analyze_samples([0.5], 8000)
        assert result.waveform.tolist() == [0.5]


class TestAnalyzeBatch:
    def test_results_in_input_order_with_failures_as_none(self, engine, silent_wav, loud_low_wav, tmp_path):
        missing = tmp_path / "missing.wav"
        results = engine.analyze_batch([loud_low_wav, missing, silent_wav])

        assert results[0].flavour.id == "beefy"
        assert results[1] is None
        assert results[2].flavour.id == "sea-salted"

    def test_empty_batch(self, engine):
        assert engine.analyze_batch([]) == []


class TestCreateEngine:
    def test_zero_workers_rejected(self):
        config = get_default_config()
        config["performance"]["max_workers"] = 0
        with pytest.raises(ConfigurationError, match="max_workers"):
            create_engine(config)
