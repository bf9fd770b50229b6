import math

from donation_points.errors import FieldError
from donation_points.services.validation import ValidationFailure, ValidationSuccess, validate_submission


def _payload(**overrides) -> dict:
    payload = {
        "name": "Parroquia San Juan",
        "address": "Calle 1",
        "postalCode": "46001",
        "city": "Valencia",
        "province": "Valencia",
        "autonomousCommunity": "Comunidad Valenciana",
        "latitude": 39.47,
        "longitude": -0.376,
        "acceptedItems": ["FOOD", "CLOTHING"],
    }
    payload.update(overrides)
    return payload


def _paths(result: ValidationFailure) -> list[tuple]:
    return [error.path for error in result.errors]


def test_valid_submission_is_normalized():
    result = validate_submission(_payload(name="  Parroquia San Juan ", description="  Abierto por la tarde  ", phone=""))

    assert isinstance(result, ValidationSuccess)
    point = result.point
    assert point.name == "Parroquia San Juan"
    assert point.postal_code == "46001"
    assert point.autonomous_community == "Comunidad Valenciana"
    assert point.latitude == 39.47
    assert point.longitude == -0.376
    assert point.accepted_items == ["FOOD", "CLOTHING"]
    assert point.description == "  Abierto por la tarde  "
    assert point.phone is None
    assert point.is_active is True


def test_missing_name_is_reported():
    payload = _payload()
    del payload["name"]

    result = validate_submission(payload)

    assert isinstance(result, ValidationFailure)
    assert ("name",) in _paths(result)
    name_error = next(error for error in result.errors if error.path == ("name",))
    assert "name" in name_error.message


def test_every_empty_required_field_is_listed():
    result = validate_submission(
        _payload(name="", address="   ", postalCode=None, city="", province="", autonomousCommunity="")
    )

    assert isinstance(result, ValidationFailure)
    paths = _paths(result)
    for field in ("name", "address", "postalCode", "city", "province", "autonomousCommunity"):
        assert (field,) in paths
    assert all(error.code == "missing" for error in result.errors)


def test_string_coordinates_are_coerced():
    result = validate_submission(_payload(latitude="39.47", longitude="-0.376"))

    assert isinstance(result, ValidationSuccess)
    assert result.point.latitude == 39.47
    assert result.point.longitude == -0.376


def test_non_numeric_coordinates_fail():
    result = validate_submission(_payload(latitude="north", longitude=True))

    assert isinstance(result, ValidationFailure)
    assert ("latitude",) in _paths(result)
    assert ("longitude",) in _paths(result)


def test_non_finite_and_out_of_range_coordinates_fail():
    assert isinstance(validate_submission(_payload(latitude=math.nan)), ValidationFailure)
    assert isinstance(validate_submission(_payload(longitude=math.inf)), ValidationFailure)
    assert isinstance(validate_submission(_payload(latitude=90.5)), ValidationFailure)
    assert isinstance(validate_submission(_payload(longitude=-180.01)), ValidationFailure)
    assert isinstance(validate_submission(_payload(latitude=-90, longitude=180)), ValidationSuccess)


def test_malformed_contact_links_fail():
    result = validate_submission(
        _payload(email="not-an-email", website="www sin esquema", googleMapsUrl="maps")
    )

    assert isinstance(result, ValidationFailure)
    paths = _paths(result)
    assert ("email",) in paths
    assert ("website",) in paths
    assert ("googleMapsUrl",) in paths


def test_well_formed_contact_links_pass_through():
    url = "https://www.google.com/maps?q=39.47,-0.376"
    result = validate_submission(
        _payload(email="contacto@caritas.es", website="https://caritas.es/valencia", googleMapsUrl=url)
    )

    assert isinstance(result, ValidationSuccess)
    assert result.point.website == "https://caritas.es/valencia"
    assert result.point.google_maps_url == url
    assert result.point.email == "contacto@caritas.es"


def test_accepted_items_are_upper_cased_and_deduplicated():
    result = validate_submission(_payload(acceptedItems=["food", "Hygiene", "FOOD"]))

    assert isinstance(result, ValidationSuccess)
    assert result.point.accepted_items == ["FOOD", "HYGIENE"]


def test_empty_accepted_items_are_allowed_by_the_schema():
    result = validate_submission(_payload(acceptedItems=[]))

    assert isinstance(result, ValidationSuccess)
    assert result.point.accepted_items == []


def test_unknown_or_non_list_accepted_items_fail():
    unknown = validate_submission(_payload(acceptedItems=["FOOD", "TOYS"]))
    not_a_list = validate_submission(_payload(acceptedItems="FOOD"))

    assert isinstance(unknown, ValidationFailure)
    assert ("acceptedItems",) in _paths(unknown)
    assert isinstance(not_a_list, ValidationFailure)


def test_non_object_payload_fails_without_raising():
    result = validate_submission(["not", "an", "object"])

    assert isinstance(result, ValidationFailure)
    assert result.errors == (FieldError(path=(), message="Submission must be a JSON object", code="type"),)


def test_client_supplied_id_is_ignored():
    result = validate_submission(_payload(id="client-id", createdAt="2024-01-01"))

    assert isinstance(result, ValidationSuccess)
    assert not hasattr(result.point, "id")


def test_optional_text_is_kept_as_submitted():
    result = validate_submission(_payload(description="  x  ", schedule=" L-V 9:00-14:00 "))

    assert isinstance(result, ValidationSuccess)
    assert result.point.description == "  x  "
    assert result.point.schedule == " L-V 9:00-14:00 "
