"""Shared fixtures for rumble tests."""

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from rumble.core.models import AudioAnalysis, FlavourZone, RumbleResult


SAMPLE_RATE = 8000


def sine(frequency: float, amplitude: float = 0.5, seconds: float = 1.0,
         sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Mono sine wave as float32."""
    t = np.arange(int(seconds * sample_rate)) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)


def write_wav(path: Path, samples: np.ndarray, sample_rate: int = SAMPLE_RATE,
              subtype: str = "PCM_16") -> Path:
    """Write samples to a WAV file and return the path."""
    sf.write(str(path), samples, sample_rate, subtype=subtype)
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def silent_wav(tmp_path):
    """1000 zero samples at 8 kHz (0.125 s)."""
    return write_wav(tmp_path / "silent.wav", np.zeros(1000, dtype=np.float32))


@pytest.fixture
def loud_low_wav(tmp_path):
    """Loud 100 Hz tone, lands in the beefy corner."""
    return write_wav(tmp_path / "growl.wav", sine(100, amplitude=0.5))


@pytest.fixture
def two_zone_catalog():
    """Two zones equidistant from (0.5, 0.5)."""
    return (
        FlavourZone(
            id="left", display_name="Left", description="", narrative_text="",
            zone_x=0.25, zone_y=0.5,
        ),
        FlavourZone(
            id="right", display_name="Right", description="", narrative_text="",
            zone_x=0.75, zone_y=0.5,
        ),
    )


@pytest.fixture
def silent_analysis():
    return AudioAnalysis(
        average_volume=0.0,
        dominant_pitch=0.0,
        duration=0.125,
        pitch_coordinate=0.0,
        volume_coordinate=0.05,
    )


@pytest.fixture
def rumble_result(silent_analysis):
    """A minimal RumbleResult for writer and session tests."""
    from rumble.core.catalog import get_flavour

    return RumbleResult(
        analysis=silent_analysis,
        flavour=get_flavour("sea-salted"),
        waveform=np.zeros(100),
        processing_time=0.01,
        file_path=Path("silent.wav"),
        audio_hash="abc123hash",
    )
