"""
Flavour catalog: the five built-in zones and loading of custom catalogs.

Zone coordinates: x is pitch (low to high), y is volume (quiet to loud).
"""

from typing import Any, Dict, Iterable, Mapping, Tuple

from rumble.core.models import FlavourZone
from rumble.utils.errors import ConfigurationError, InvalidInputError


FLAVOUR_CATALOG: Tuple[FlavourZone, ...] = (
    FlavourZone(
        id="beefy",
        display_name="Beefy",
        description=(
            "Rich, meaty flavour that satisfies the deepest hungers. "
            "Britain's original crinkle cut with bold, hearty taste."
        ),
        narrative_text="We heard a deep, growly rumble... it's gotta be BEEFY!",
        zone_x=0.2,  # Low pitch
        zone_y=0.8,  # High volume
        image_url="/beefy.jpg",
    ),
    FlavourZone(
        id="prawn-cocktail",
        display_name="Prawn Cocktail",
        description=(
            "Tangy seafood sensation with a cocktail twist. "
            "A Yorkshire favourite since 1979."
        ),
        narrative_text="That delicate, high-pitched tummy whisper calls for PRAWN COCKTAIL!",
        zone_x=0.8,  # High pitch
        zone_y=0.2,  # Low volume
        image_url="/prawn-cocktail.jpg",
    ),
    FlavourZone(
        id="cheese-onion",
        display_name="Cheese & Onion",
        description=(
            "Classic combination of sharp cheese and caramelised onion. "
            "Brilliant by the bagful."
        ),
        narrative_text="A perfectly balanced rumble demands the classic CHEESE & ONION!",
        zone_x=0.5,  # Mid pitch
        zone_y=0.5,  # Mid volume
        image_url="/cheese-onion.jpg",
    ),
    FlavourZone(
        id="sea-salt-vinegar",
        display_name="Sea Salt & Vinegar",
        description=(
            "Sharp, tangy punch with proper sea salt. "
            "The bold taste of the UK's number 1 crinkle cut crisp."
        ),
        narrative_text="That loud, sharp stomach shriek screams SEA SALT & VINEGAR!",
        zone_x=0.8,  # High pitch
        zone_y=0.8,  # High volume
        image_url="/salt-vinegar.jpg",
    ),
    FlavourZone(
        id="sea-salted",
        display_name="Sea Salted",
        description=(
            "Simple, pure potato perfection with natural sea salt. "
            "Made from potatoes grown within 50 miles of Bradford."
        ),
        narrative_text="A gentle, subtle rumble suggests you're a SEA SALTED purist!",
        zone_x=0.2,  # Low pitch
        zone_y=0.2,  # Low volume
        image_url="/sea-salted.webp",
    ),
)

_BY_ID: Dict[str, FlavourZone] = {zone.id: zone for zone in FLAVOUR_CATALOG}

REQUIRED_KEYS = ("id", "name", "description", "rumble_description", "zone")


def get_flavour(flavour_id: str) -> FlavourZone:
    """
    Look up a built-in flavour by id.

    Raises:
        KeyError: If no built-in flavour has that id
    """
    return _BY_ID[flavour_id]


def zone_from_mapping(entry: Mapping[str, Any]) -> FlavourZone:
    """
    Build a FlavourZone from a config mapping.

    Expected shape (matches FlavourZone.to_dict()):
        {"id": ..., "name": ..., "description": ..., "rumble_description": ...,
         "zone": {"x": 0.2, "y": 0.8}, "image_url": optional}

    Raises:
        ConfigurationError: If keys are missing or values are out of range
    """
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"Flavour entry must be a mapping, got {type(entry).__name__}")

    missing = [key for key in REQUIRED_KEYS if key not in entry]
    if missing:
        raise ConfigurationError(
            f"Flavour entry missing keys: {', '.join(missing)}",
            config_key=f"flavours.{entry.get('id', '?')}",
        )

    zone = entry["zone"]
    if not isinstance(zone, Mapping) or "x" not in zone or "y" not in zone:
        raise ConfigurationError(
            "Flavour zone must be a mapping with 'x' and 'y'",
            config_key=f"flavours.{entry['id']}.zone",
        )

    try:
        return FlavourZone(
            id=str(entry["id"]),
            display_name=str(entry["name"]),
            description=str(entry["description"]),
            narrative_text=str(entry["rumble_description"]),
            zone_x=float(zone["x"]),
            zone_y=float(zone["y"]),
            image_url=entry.get("image_url"),
        )
    except (InvalidInputError, TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid flavour entry '{entry['id']}': {e}",
            config_key=f"flavours.{entry['id']}",
        ) from e


def load_catalog(entries: Iterable[Mapping[str, Any]]) -> Tuple[FlavourZone, ...]:
    """
    Build a catalog from config entries, preserving their order.

    Order matters: the classifier resolves ties in favour of earlier
    entries.

    Raises:
        ConfigurationError: On malformed entries or duplicate ids
    """
    catalog = tuple(zone_from_mapping(entry) for entry in entries)

    seen = set()
    for zone in catalog:
        if zone.id in seen:
            raise ConfigurationError(
                f"Duplicate flavour id: {zone.id}",
                config_key=f"flavours.{zone.id}",
            )
        seen.add(zone.id)

    return catalog
