"""
Core data models for the Rumble flavour matcher.

Immutable records for decoded audio, extracted features, flavour
zones and the combined result handed to the presentation layer.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from rumble.utils.errors import InvalidInputError


def validate_unit_interval(name: str, value: float) -> None:
    """Validate that a coordinate lies in [0.0, 1.0]."""
    if not math.isfinite(value) or not (0.0 <= value <= 1.0):
        raise InvalidInputError(
            f"{name} must be in [0.0, 1.0], got {value}",
            field_name=name,
            value=value,
        )


def validate_non_negative(name: str, value: float) -> None:
    """Validate that a measurement is finite and >= 0."""
    if not math.isfinite(value) or value < 0.0:
        raise InvalidInputError(
            f"{name} must be >= 0, got {value}",
            field_name=name,
            value=value,
        )


@dataclass(frozen=True)
class DecodedAudio:
    """
    Mono PCM audio produced by the loader.

    Samples are float32 amplitudes in [-1, 1] at `sample_rate`.
    """

    file_path: Path
    file_hash: str  # SHA-256 of original file
    media_type: str
    samples: np.ndarray = field(repr=False, compare=False)
    sample_rate: int
    duration: float

    # Container metadata as reported by soundfile, when available
    original_format: Optional[str] = None
    original_subtype: Optional[str] = None

    @property
    def num_samples(self) -> int:
        return int(self.samples.shape[0])


@dataclass(frozen=True)
class AudioAnalysis:
    """
    Loudness and pitch features of one clip.

    `average_volume` is the raw RMS and is not capped; the two
    coordinates are the normalized values used for classification.
    """

    average_volume: float
    dominant_pitch: float  # Hz
    duration: float  # seconds
    pitch_coordinate: float  # [0.0, 1.0]
    volume_coordinate: float  # [0.0, 1.0]

    def __post_init__(self) -> None:
        """Validate fields."""
        validate_non_negative("average_volume", self.average_volume)
        validate_non_negative("dominant_pitch", self.dominant_pitch)
        if not math.isfinite(self.duration) or self.duration <= 0.0:
            raise InvalidInputError(
                f"duration must be > 0, got {self.duration}",
                field_name="duration",
                value=self.duration,
            )
        validate_unit_interval("pitch_coordinate", self.pitch_coordinate)
        validate_unit_interval("volume_coordinate", self.volume_coordinate)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the presentation field names."""
        return {
            'averageVolume': self.average_volume,
            'dominantPitch': self.dominant_pitch,
            'duration': self.duration,
            'pitchCoordinate': self.pitch_coordinate,
            'volumeCoordinate': self.volume_coordinate,
        }


@dataclass(frozen=True)
class FlavourZone:
    """A labelled point in coordinate space representing one flavour."""

    id: str
    display_name: str
    description: str
    narrative_text: str
    zone_x: float  # pitch axis, low to high
    zone_y: float  # volume axis, quiet to loud
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate fields."""
        if not self.id:
            raise InvalidInputError("Flavour id must not be empty", field_name="id", value=self.id)
        validate_unit_interval("zone_x", self.zone_x)
        validate_unit_interval("zone_y", self.zone_y)

    def distance_to(self, pitch_coordinate: float, volume_coordinate: float) -> float:
        """Euclidean distance from this zone to a point."""
        return math.sqrt(
            (pitch_coordinate - self.zone_x) ** 2
            + (volume_coordinate - self.zone_y) ** 2
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'name': self.display_name,
            'description': self.description,
            'rumble_description': self.narrative_text,
            'zone': {'x': self.zone_x, 'y': self.zone_y},
            'image_url': self.image_url,
        }


@dataclass(frozen=True)
class RumbleResult:
    """Everything the presentation layer needs for one analysed clip."""

    analysis: AudioAnalysis
    flavour: FlavourZone
    waveform: np.ndarray = field(repr=False, compare=False)
    processing_time: float = 0.0
    file_path: Optional[Path] = None
    audio_hash: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_summary(self) -> str:
        """One-line human readable summary."""
        a = self.analysis
        return (
            f"{self.flavour.display_name} "
            f"(pitch {a.dominant_pitch:.1f} Hz, volume {a.average_volume:.3f} RMS, "
            f"{a.duration:.2f}s)"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'file_path': str(self.file_path) if self.file_path else None,
            'audio_hash': self.audio_hash,
            'timestamp': self.timestamp.isoformat(),
            'processing_time': self.processing_time,
            'analysis': self.analysis.to_dict(),
            'flavour': self.flavour.to_dict(),
            'waveform': [float(v) for v in self.waveform],
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
