"""Visualization helpers for rumble analysis."""

from rumble.visualization.waveform import DEFAULT_POINTS, downsample, render_ascii

__all__ = [
    "DEFAULT_POINTS",
    "downsample",
    "render_ascii",
]
