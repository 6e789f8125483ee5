"""
Nearest-zone flavour classifier.

Both axes are already scaled to [0, 1], so plain Euclidean distance
is used with no per-axis weighting.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from rumble.core.catalog import FLAVOUR_CATALOG, load_catalog
from rumble.core.models import AudioAnalysis, FlavourZone, validate_unit_interval
from rumble.utils.errors import EmptyCatalogError


def classify(
    pitch_coordinate: float,
    volume_coordinate: float,
    catalog: Sequence[FlavourZone] = FLAVOUR_CATALOG,
) -> FlavourZone:
    """
    Return the catalog entry nearest to the given coordinates.

    Ties go to the entry that appears first in the catalog.

    Args:
        pitch_coordinate: Normalized pitch in [0, 1]
        volume_coordinate: Normalized volume in [0, 1]
        catalog: Candidate zones, in priority order

    Returns:
        FlavourZone: Closest zone

    Raises:
        InvalidInputError: If a coordinate is outside [0, 1]
        EmptyCatalogError: If the catalog has no entries
    """
    validate_unit_interval("pitch_coordinate", pitch_coordinate)
    validate_unit_interval("volume_coordinate", volume_coordinate)

    if not catalog:
        raise EmptyCatalogError()

    closest = catalog[0]
    min_distance = closest.distance_to(pitch_coordinate, volume_coordinate)

    for zone in catalog[1:]:
        distance = zone.distance_to(pitch_coordinate, volume_coordinate)
        if distance < min_distance:
            min_distance = distance
            closest = zone

    return closest


def find_closest_flavour(pitch: float, volume: float) -> FlavourZone:
    """Classify against the built-in five-flavour catalog."""
    return classify(pitch, volume, FLAVOUR_CATALOG)


class FlavourClassifier:
    """Classifier bound to one catalog."""

    def __init__(self, catalog: Sequence[FlavourZone] = FLAVOUR_CATALOG):
        if not catalog:
            raise EmptyCatalogError()
        self.catalog = tuple(catalog)
        self.logger = logging.getLogger("classifier")

    def classify(self, analysis: AudioAnalysis) -> FlavourZone:
        """Pick the flavour for an extracted analysis."""
        flavour = classify(
            analysis.pitch_coordinate,
            analysis.volume_coordinate,
            self.catalog,
        )
        self.logger.debug(
            "(%.3f, %.3f) -> %s",
            analysis.pitch_coordinate,
            analysis.volume_coordinate,
            flavour.id,
        )
        return flavour


def create_classifier(config: Optional[Dict[str, Any]] = None) -> FlavourClassifier:
    """
    Factory function to create a classifier from configuration.

    Uses the `flavours` list when present, else the built-in catalog.
    """
    entries = (config or {}).get('flavours')
    if entries is None:
        return FlavourClassifier()
    return FlavourClassifier(load_catalog(entries))
