"""
Waveform envelope for display.

Not used by classification; the presentation layer draws one bar per
returned value.
"""

from typing import Sequence, Union

import numpy as np

from rumble.utils.errors import InvalidInputError

DEFAULT_POINTS: int = 100


def downsample(
    samples: Union[np.ndarray, Sequence[float]],
    target_points: int = DEFAULT_POINTS,
) -> np.ndarray:
    """
    Reduce samples to `target_points` mean-absolute-amplitude values.

    Samples are split into contiguous blocks of floor(N / target_points);
    samples past the last full block are dropped.

    Args:
        samples: Mono amplitudes
        target_points: Number of output values

    Returns:
        np.ndarray: float64 array of length target_points

    Raises:
        InvalidInputError: If target_points < 1 or fewer samples than points
    """
    if target_points < 1:
        raise InvalidInputError(
            f"target_points must be >= 1, got {target_points}",
            field_name="target_points",
            value=target_points,
        )

    data = np.asarray(samples, dtype=np.float64)
    if data.ndim != 1:
        raise InvalidInputError(
            f"Samples must be mono (1-D), got shape {data.shape}",
            field_name="samples",
            value=data.shape,
        )
    if data.shape[0] < target_points:
        raise InvalidInputError(
            f"Need at least {target_points} samples, got {data.shape[0]}",
            field_name="samples",
            value=data.shape[0],
        )

    block_size = data.shape[0] // target_points
    blocks = np.abs(data[:block_size * target_points]).reshape(target_points, block_size)
    return blocks.mean(axis=1)


def render_ascii(waveform: np.ndarray, height: int = 8) -> str:
    """Render an envelope as rows of block characters, loudest at the top."""
    if waveform.size == 0:
        return ""
    peak = float(waveform.max())
    levels = np.zeros(waveform.shape, dtype=int) if peak == 0 else np.ceil(waveform / peak * height).astype(int)

    rows = []
    for row in range(height, 0, -1):
        rows.append("".join("█" if level >= row else " " for level in levels))
    return "\n".join(rows)
