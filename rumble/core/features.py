"""
Feature extraction for the Rumble flavour matcher.

Computes RMS loudness and a zero-crossing pitch estimate from mono
samples and maps both onto the [0, 1] coordinate space used by the
flavour classifier.

The zero-crossing estimate is deliberately crude: it is only accurate
for near-monotone periodic signals. It is kept exactly as is so that
results stay comparable with earlier releases.
"""

import logging
import math
from typing import Optional, Sequence, Union

import numpy as np

from rumble.core.models import AudioAnalysis
from rumble.utils.errors import InvalidInputError

Samples = Union[np.ndarray, Sequence[float]]

# Volume mapping
VOLUME_GAIN: float = 4.0  # typical RMS tops out around 0.25
MIN_VOLUME_COORDINATE: float = 0.05

# Pitch mapping (Hz), log-scaled
MIN_PITCH_HZ: float = 50.0
MAX_PITCH_HZ: float = 1000.0


def _as_mono_array(samples: Samples) -> np.ndarray:
    """Validate and convert input samples to a 1-D float64 array."""
    try:
        data = np.asarray(samples, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Samples must be numeric: {e}", field_name="samples") from e

    if data.ndim != 1:
        raise InvalidInputError(
            f"Samples must be mono (1-D), got shape {data.shape}",
            field_name="samples",
            value=data.shape,
        )
    if data.size == 0:
        raise InvalidInputError("Samples must not be empty", field_name="samples", value=0)
    if not np.all(np.isfinite(data)):
        raise InvalidInputError("Samples contain NaN or infinite values", field_name="samples")
    return data


def _validate_sample_rate(sample_rate: int) -> None:
    if isinstance(sample_rate, bool) or not isinstance(sample_rate, (int, np.integer)):
        raise InvalidInputError(
            f"Sample rate must be an integer, got {sample_rate!r}",
            field_name="sample_rate",
            value=sample_rate,
        )
    if sample_rate <= 0:
        raise InvalidInputError(
            f"Sample rate must be positive, got {sample_rate}",
            field_name="sample_rate",
            value=sample_rate,
        )


def calculate_rms(samples: np.ndarray) -> float:
    """Root-mean-square amplitude of the samples."""
    return float(np.sqrt(np.mean(np.square(samples))))


def count_zero_crossings(samples: np.ndarray) -> int:
    """
    Count sign changes between consecutive samples.

    Zero counts as non-negative: 0.0 -> -0.1 is a crossing, 0.0 -> 0.1 is not.
    """
    non_negative = samples >= 0
    return int(np.count_nonzero(non_negative[1:] != non_negative[:-1]))


def estimate_dominant_pitch(samples: np.ndarray, sample_rate: int) -> float:
    """Estimate frequency in Hz as crossings * sample_rate / (2 * N)."""
    crossings = count_zero_crossings(samples)
    return (crossings * sample_rate) / (2 * samples.shape[0])


def normalize_volume(rms: float) -> float:
    """Map RMS onto [0.05, 1.0]; quiet clips never vanish from the grid."""
    return max(min(rms * VOLUME_GAIN, 1.0), MIN_VOLUME_COORDINATE)


def normalize_pitch(frequency: float) -> float:
    """
    Map frequency onto [0, 1] on a log scale.

    50 Hz maps to 0.0, 1000 Hz to 1.0 and the geometric midpoint
    (~224 Hz) to 0.5. Frequencies outside the range are clamped first.
    """
    clamped = max(MIN_PITCH_HZ, min(frequency, MAX_PITCH_HZ))

    log_min = math.log(MIN_PITCH_HZ)
    log_max = math.log(MAX_PITCH_HZ)

    return (math.log(clamped) - log_min) / (log_max - log_min)


def extract_features(
    samples: Samples,
    sample_rate: int,
    duration: Optional[float] = None,
) -> AudioAnalysis:
    """
    Extract loudness and pitch features from mono samples.

    Args:
        samples: Mono amplitudes in [-1, 1]
        sample_rate: Samples per second
        duration: Clip length in seconds if the decoder already knows it;
                  defaults to len(samples) / sample_rate

    Returns:
        AudioAnalysis: Raw and normalized features

    Raises:
        InvalidInputError: Empty or malformed samples, non-positive
                           sample rate or duration
    """
    data = _as_mono_array(samples)
    _validate_sample_rate(sample_rate)

    if duration is None:
        duration = data.shape[0] / sample_rate
    elif not math.isfinite(duration) or duration <= 0:
        raise InvalidInputError(
            f"Duration must be positive, got {duration}",
            field_name="duration",
            value=duration,
        )

    average_volume = calculate_rms(data)
    dominant_pitch = estimate_dominant_pitch(data, sample_rate)

    return AudioAnalysis(
        average_volume=average_volume,
        dominant_pitch=dominant_pitch,
        duration=float(duration),
        pitch_coordinate=normalize_pitch(dominant_pitch),
        volume_coordinate=normalize_volume(average_volume),
    )


class FeatureExtractor:
    """
    Injectable wrapper around extract_features() used by the engine.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger("features")

    def extract(
        self,
        samples: Samples,
        sample_rate: int,
        duration: Optional[float] = None,
    ) -> AudioAnalysis:
        """Extract features and log the outcome."""
        analysis = extract_features(samples, sample_rate, duration)
        self.logger.debug(
            "Extracted features: rms=%.4f pitch=%.1fHz coords=(%.3f, %.3f)",
            analysis.average_volume,
            analysis.dominant_pitch,
            analysis.pitch_coordinate,
            analysis.volume_coordinate,
        )
        return analysis
