"""
Core module containing data models, feature extraction, classification
and the analysis engine.

Uses lazy imports for modules with heavy dependencies (librosa).
"""

# Models and pure-numpy analysis are lightweight - import directly
from rumble.core.models import (
    AudioAnalysis,
    DecodedAudio,
    FlavourZone,
    RumbleResult,
)
from rumble.core.features import FeatureExtractor, extract_features
from rumble.core.catalog import FLAVOUR_CATALOG, get_flavour, load_catalog
from rumble.core.classifier import FlavourClassifier, classify, find_closest_flavour
from rumble.core.session import AppState, RumbleSession

__all__ = [
    "AudioAnalysis",
    "DecodedAudio",
    "FlavourZone",
    "RumbleResult",
    "FeatureExtractor",
    "extract_features",
    "FLAVOUR_CATALOG",
    "get_flavour",
    "load_catalog",
    "FlavourClassifier",
    "classify",
    "find_closest_flavour",
    "AppState",
    "RumbleSession",
    # Heavy modules (lazy loaded)
    "AudioLoader",
    "create_audio_loader",
    "RumbleEngine",
    "create_engine",
]


def __getattr__(name: str):
    """Lazy load modules that pull in librosa."""
    if name in ("AudioLoader", "create_audio_loader"):
        from rumble.core.loader import AudioLoader, create_audio_loader
        return AudioLoader if name == "AudioLoader" else create_audio_loader
    elif name in ("RumbleEngine", "create_engine"):
        from rumble.core.engine import RumbleEngine, create_engine
        return RumbleEngine if name == "RumbleEngine" else create_engine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
