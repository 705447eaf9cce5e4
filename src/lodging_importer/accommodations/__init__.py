"""Accommodation domain models and listing mapping helpers."""

from .mapper import (
    DEFAULT_ACCO_TYPE_IDS,
    AccommodationMapper,
    map_accommodation_type,
    map_lodging_business,
    parse_room_count,
)
from .models import (
    AccoDetailLanguage,
    AccoMeta,
    Accommodation,
    AccoOverview,
    AccoType,
    GpsPosition,
    ListingPage,
    LodgingBusiness,
)

__all__ = [
    "AccoDetailLanguage",
    "AccoMeta",
    "AccoOverview",
    "AccoType",
    "Accommodation",
    "AccommodationMapper",
    "DEFAULT_ACCO_TYPE_IDS",
    "GpsPosition",
    "ListingPage",
    "LodgingBusiness",
    "map_accommodation_type",
    "map_lodging_business",
    "parse_room_count",
]
