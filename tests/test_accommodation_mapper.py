from __future__ import annotations

import json

import pytest

from lodging_importer.accommodations import (
    AccommodationMapper,
    LodgingBusiness,
    map_accommodation_type,
    map_lodging_business,
    parse_room_count,
)
from lodging_importer.storage.json_writer import render_accommodation


def _listing_payload() -> dict:
    return {
        "name": "Hotel Bellevue",
        "identifier": "LB-1001",
        "address": {
            "addressCountry": "CH",
            "addressLocality": "Zürich",
            "postalCode": "8001",
            "streetAddress": "Limmatquai 1",
            "email": "info@bellevue.test",
            "telephone": "+41 44 000 00 00",
        },
        "geo": {"latitude": 47.3769, "longitude": 8.5417},
        "numberOfRooms": [
            {"propertyId": "total", "value": "40"},
            {"propertyId": "single", "value": "10"},
            {"propertyId": "double", "value": "30"},
            {"propertyId": "suite", "value": "2"},
        ],
        "starRating": {"ratingValue": 4.0, "additionalType": "Hotel", "name": "4 stars"},
        "numberOfBeds": 70,
        "checkinTime": "14:00",
        "checkinTimeTo": "22:00",
        "checkoutTimeFrom": "07:00",
        "checkoutTime": "11:00",
        "url": "https://bellevue.test",
    }


def test_map_full_listing_builds_catalog_record():
    record = LodgingBusiness.model_validate(_listing_payload())

    accommodation = map_lodging_business(record)
    data = accommodation.to_dict()

    assert list(data) == [
        "Source",
        "Active",
        "Shortname",
        "_Meta",
        "AccoDetail",
        "GpsInfo",
        "AccoType",
        "AccoOverview",
    ]
    assert data["Source"] == "discoverSwiss"
    assert data["Active"] is True
    assert data["Shortname"] == "Hotel Bellevue"
    assert data["_Meta"] == {"Id": "LB-1001", "Type": "accommodation", "Source": "discoverSwiss"}
    assert data["AccoDetail"] == {
        "de": {
            "Name": "Hotel Bellevue",
            "Street": "Limmatquai 1",
            "Zip": "8001",
            "City": "Zürich",
            "CountryCode": "CH",
            "Email": "info@bellevue.test",
            "Phone": "+41 44 000 00 00",
        }
    }
    assert data["GpsInfo"] == [
        {
            "Gpstype": "position",
            "Latitude": 47.3769,
            "Longitude": 8.5417,
            "Altitude": 0,
            "AltitudeUnitofMeasure": "m",
        }
    ]
    assert data["AccoType"] == {"Id": "HotelPension"}
    assert data["AccoOverview"] == {
        "TotalRooms": 40,
        "SingleRooms": 10,
        "DoubleRooms": 30,
        "CheckInFrom": "14:00",
        "CheckInTo": "22:00",
        "CheckOutFrom": "07:00",
        "CheckOutTo": "11:00",
        "MaxPersons": 70,
    }


def test_map_empty_listing_uses_zero_values():
    accommodation = map_lodging_business(LodgingBusiness.model_validate({}))
    data = accommodation.to_dict()

    assert data["Shortname"] == ""
    assert data["_Meta"]["Id"] == ""
    assert data["AccoType"] == {"Id": ""}
    assert data["GpsInfo"] == [
        {
            "Gpstype": "position",
            "Latitude": 0.0,
            "Longitude": 0.0,
            "Altitude": 0,
            "AltitudeUnitofMeasure": "m",
        }
    ]
    overview = data["AccoOverview"]
    assert overview["TotalRooms"] == overview["SingleRooms"] == overview["DoubleRooms"] == 0
    assert overview["MaxPersons"] == 0
    assert overview["CheckInFrom"] == ""


def test_null_fields_decode_as_absent():
    record = LodgingBusiness.model_validate(
        {
            "name": None,
            "address": None,
            "geo": {"latitude": None, "longitude": 7.5},
            "numberOfRooms": [None, {"propertyId": "total", "value": None}],
            "starRating": None,
            "identifier": "LB-2",
        }
    )

    data = map_lodging_business(record).to_dict()

    assert data["Shortname"] == ""
    assert data["AccoDetail"]["de"]["City"] == ""
    assert data["GpsInfo"][0]["Latitude"] == 0.0
    assert data["GpsInfo"][0]["Longitude"] == 7.5
    assert data["AccoOverview"]["TotalRooms"] == 0
    assert data["_Meta"]["Id"] == "LB-2"


def test_room_counts_coerce_unparseable_values_to_zero():
    record = LodgingBusiness.model_validate(
        {
            "numberOfRooms": [
                {"propertyId": "total", "value": "12"},
                {"propertyId": "single", "value": "5"},
                {"propertyId": "double", "value": "x"},
            ]
        }
    )

    overview = map_lodging_business(record).overview

    assert overview.total_rooms == 12
    assert overview.single_rooms == 5
    assert overview.double_rooms == 0


def test_room_counts_last_occurrence_wins_and_unknown_keys_ignored():
    record = LodgingBusiness.model_validate(
        {
            "numberOfRooms": [
                {"propertyId": "total", "value": "10"},
                {"propertyId": "family", "value": "3"},
                {"propertyId": "total", "value": "14"},
                {"propertyId": "Total", "value": "99"},
            ]
        }
    )

    overview = map_lodging_business(record).overview

    assert overview.total_rooms == 14
    assert overview.single_rooms == 0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("12", 12),
        (" 7", 7),
        ("7 rooms", 7),
        ("+3", 3),
        ("-2", -2),
        ("1.5", 1),
        ("x", 0),
        ("", 0),
        (None, 0),
        ("٣", 0),
        ("１２", 0),
    ],
)
def test_parse_room_count(raw, expected):
    assert parse_room_count(raw) == expected


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Hotel", "HotelPension"),
        ("hotel", "HotelPension"),
        ("HOTEL", "HotelPension"),
        ("B&B", "B&B"),
        ("Camping", "Camping"),
        ("", ""),
    ],
)
def test_map_accommodation_type(label, expected):
    assert map_accommodation_type(label) == expected


def test_mapper_accepts_extended_type_table():
    mapper = AccommodationMapper({"Hotel": "HotelPension", "Bed and Breakfast": "BedBreakfast"})
    record = LodgingBusiness.model_validate({"starRating": {"additionalType": "bed and breakfast"}})

    assert mapper.map(record).acco_type.id == "BedBreakfast"
    assert mapper.type_ids["hotel"] == "HotelPension"


def test_max_persons_is_not_reconciled_with_rooms():
    record = LodgingBusiness.model_validate(
        {"numberOfRooms": [{"propertyId": "double", "value": "10"}], "numberOfBeds": 4}
    )

    overview = map_lodging_business(record).overview

    assert overview.double_rooms == 10
    assert overview.max_persons == 4


def test_mapping_is_deterministic():
    record = LodgingBusiness.model_validate(_listing_payload())

    first = render_accommodation(map_lodging_business(record))
    second = render_accommodation(map_lodging_business(record))

    assert first == second
    assert json.loads(first)["_Meta"]["Id"] == "LB-1001"
