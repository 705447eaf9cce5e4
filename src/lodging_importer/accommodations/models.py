"""Listing payload models and the catalog accommodation record they are mapped into."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SOURCE_TAG = "discoverSwiss"
META_TYPE = "accommodation"
GPS_TYPE_POSITION = "position"
ALTITUDE_UNIT = "m"


class _ListingModel(BaseModel):
    """Base for listing payload models: unknown keys are ignored and ``null`` means absent."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: item for key, item in value.items() if item is not None}
        return value


def _replace_null_entries(value: Any) -> Any:
    if isinstance(value, list):
        return [{} if item is None else item for item in value]
    return value


class PostalAddress(_ListingModel):
    address_country: str = Field(default="", alias="addressCountry")
    address_locality: str = Field(default="", alias="addressLocality")
    postal_code: str = Field(default="", alias="postalCode")
    street_address: str = Field(default="", alias="streetAddress")
    email: str = ""
    telephone: str = ""


class GeoCoordinates(_ListingModel):
    # 0.0 doubles as "unknown"; the listing API does not distinguish the two.
    latitude: float = 0.0
    longitude: float = 0.0


class RoomCount(_ListingModel):
    property_id: str = Field(default="", alias="propertyId")
    value: str = ""


class StarRating(_ListingModel):
    rating_value: float = Field(default=0.0, alias="ratingValue")
    additional_type: str = Field(default="", alias="additionalType")
    name: str = ""


class LodgingBusiness(_ListingModel):
    """One listing as returned by the remote API."""

    name: str = ""
    address: PostalAddress = Field(default_factory=PostalAddress)
    geo: GeoCoordinates = Field(default_factory=GeoCoordinates)
    number_of_rooms: List[RoomCount] = Field(default_factory=list, alias="numberOfRooms")
    star_rating: StarRating = Field(default_factory=StarRating, alias="starRating")
    number_of_beds: int = Field(default=0, alias="numberOfBeds")
    identifier: str = ""
    checkin_time: str = Field(default="", alias="checkinTime")
    checkin_time_to: str = Field(default="", alias="checkinTimeTo")
    checkout_time_from: str = Field(default="", alias="checkoutTimeFrom")
    checkout_time: str = Field(default="", alias="checkoutTime")

    @field_validator("number_of_rooms", mode="before")
    @classmethod
    def _null_room_entries(cls, value: Any) -> Any:
        return _replace_null_entries(value)


class ListingPage(_ListingModel):
    """Decoded body of one listing API response."""

    count: int = 0
    has_next_page: bool = Field(default=False, alias="hasNextPage")
    next_page_token: str = Field(default="", alias="nextPageToken")
    data: List[LodgingBusiness] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _null_records(cls, value: Any) -> Any:
        return _replace_null_entries(value)

    @property
    def is_last(self) -> bool:
        # A page may claim more results without handing out a token; that ends the run too.
        return not self.has_next_page or not self.next_page_token


@dataclass(slots=True)
class AccoMeta:
    id: str
    type: str = META_TYPE
    source: str = SOURCE_TAG

    def to_dict(self) -> dict[str, object]:
        return {"Id": self.id, "Type": self.type, "Source": self.source}


@dataclass(slots=True)
class AccoDetailLanguage:
    """Address block of the catalog record for a single language."""

    name: str = ""
    street: str = ""
    zip: str = ""
    city: str = ""
    country_code: str = ""
    email: str = ""
    phone: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "Name": self.name,
            "Street": self.street,
            "Zip": self.zip,
            "City": self.city,
            "CountryCode": self.country_code,
            "Email": self.email,
            "Phone": self.phone,
        }


@dataclass(slots=True)
class GpsPosition:
    latitude: float
    longitude: float
    gps_type: str = GPS_TYPE_POSITION
    altitude: float = 0
    altitude_unit: str = ALTITUDE_UNIT

    def to_dict(self) -> dict[str, object]:
        return {
            "Gpstype": self.gps_type,
            "Latitude": self.latitude,
            "Longitude": self.longitude,
            "Altitude": self.altitude,
            "AltitudeUnitofMeasure": self.altitude_unit,
        }


@dataclass(slots=True)
class AccoType:
    id: str

    def to_dict(self) -> dict[str, object]:
        return {"Id": self.id}


@dataclass(slots=True)
class AccoOverview:
    total_rooms: int = 0
    single_rooms: int = 0
    double_rooms: int = 0
    check_in_from: str = ""
    check_in_to: str = ""
    check_out_from: str = ""
    check_out_to: str = ""
    max_persons: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "TotalRooms": self.total_rooms,
            "SingleRooms": self.single_rooms,
            "DoubleRooms": self.double_rooms,
            "CheckInFrom": self.check_in_from,
            "CheckInTo": self.check_in_to,
            "CheckOutFrom": self.check_out_from,
            "CheckOutTo": self.check_out_to,
            "MaxPersons": self.max_persons,
        }


@dataclass(slots=True)
class Accommodation:
    """Catalog accommodation record produced from a single listing."""

    shortname: str
    meta: AccoMeta
    detail_de: AccoDetailLanguage
    acco_type: AccoType
    overview: AccoOverview
    gps_info: List[GpsPosition] = field(default_factory=list)
    source: str = SOURCE_TAG
    active: bool = True

    @property
    def identifier(self) -> str:
        return self.meta.id

    def to_dict(self) -> dict[str, object]:
        return {
            "Source": self.source,
            "Active": self.active,
            "Shortname": self.shortname,
            "_Meta": self.meta.to_dict(),
            "AccoDetail": {"de": self.detail_de.to_dict()},
            "GpsInfo": [position.to_dict() for position in self.gps_info],
            "AccoType": self.acco_type.to_dict(),
            "AccoOverview": self.overview.to_dict(),
        }
