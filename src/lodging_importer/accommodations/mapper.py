"""Project listing payloads onto the catalog accommodation schema."""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .models import (
    AccoDetailLanguage,
    AccoMeta,
    Accommodation,
    AccoOverview,
    AccoType,
    GpsPosition,
    LodgingBusiness,
    RoomCount,
)

# Keys are compared case-insensitively; extend here to translate more listing categories.
DEFAULT_ACCO_TYPE_IDS: Mapping[str, str] = MappingProxyType(
    {
        "hotel": "HotelPension",
    }
)

ROOM_KEY_TOTAL = "total"
ROOM_KEY_SINGLE = "single"
ROOM_KEY_DOUBLE = "double"

_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


def parse_room_count(value: Optional[str]) -> int:
    """Read the leading base-10 integer of ``value``; anything unreadable counts as 0."""
    if not value:
        return 0
    match = _LEADING_INTEGER.match(value)
    if match is None:
        return 0
    return int(match.group(1))


def map_accommodation_type(label: str, table: Mapping[str, str] = DEFAULT_ACCO_TYPE_IDS) -> str:
    """Translate a listing category label into a catalog type id.

    Labels without an entry in ``table`` are passed through unchanged.
    """
    return table.get(label.casefold(), label)


def _aggregate_room_counts(rooms: Iterable[RoomCount]) -> dict[str, int]:
    totals = {ROOM_KEY_TOTAL: 0, ROOM_KEY_SINGLE: 0, ROOM_KEY_DOUBLE: 0}
    for room in rooms:
        if room.property_id in totals:
            totals[room.property_id] = parse_room_count(room.value)
    return totals


class AccommodationMapper:
    """Builds :class:`Accommodation` records from :class:`LodgingBusiness` listings."""

    def __init__(self, type_ids: Optional[Mapping[str, str]] = None) -> None:
        if type_ids is None:
            self._type_ids: Mapping[str, str] = DEFAULT_ACCO_TYPE_IDS
        else:
            self._type_ids = {label.casefold(): type_id for label, type_id in type_ids.items()}

    @property
    def type_ids(self) -> Mapping[str, str]:
        return self._type_ids

    def map(self, record: LodgingBusiness) -> Accommodation:
        address = record.address
        rooms = _aggregate_room_counts(record.number_of_rooms)

        return Accommodation(
            shortname=record.name,
            meta=AccoMeta(id=record.identifier),
            detail_de=AccoDetailLanguage(
                name=record.name,
                street=address.street_address,
                zip=address.postal_code,
                city=address.address_locality,
                country_code=address.address_country,
                email=address.email,
                phone=address.telephone,
            ),
            gps_info=[
                GpsPosition(
                    latitude=record.geo.latitude,
                    longitude=record.geo.longitude,
                )
            ],
            acco_type=AccoType(
                id=map_accommodation_type(record.star_rating.additional_type, self._type_ids)
            ),
            overview=AccoOverview(
                total_rooms=rooms[ROOM_KEY_TOTAL],
                single_rooms=rooms[ROOM_KEY_SINGLE],
                double_rooms=rooms[ROOM_KEY_DOUBLE],
                check_in_from=record.checkin_time,
                check_in_to=record.checkin_time_to,
                check_out_from=record.checkout_time_from,
                check_out_to=record.checkout_time,
                max_persons=record.number_of_beds,
            ),
        )


_default_mapper = AccommodationMapper()


def map_lodging_business(record: LodgingBusiness) -> Accommodation:
    return _default_mapper.map(record)
