import pytest

from donation_points.errors import DuplicateConflict, PersistenceError, ValidationError
from donation_points.persistence.memory import InMemoryDonationPointStore
from donation_points.services.duplicates import DuplicateGuard
from donation_points.services.ingestion import create_donation_point, list_donation_points, parse_item_list


def _payload(lat: float = 39.47, lon: float = -0.376, **overrides) -> dict:
    payload = {
        "name": "Parroquia",
        "address": "Calle 1",
        "postalCode": "46001",
        "city": "Valencia",
        "province": "Valencia",
        "autonomousCommunity": "Comunidad Valenciana",
        "latitude": lat,
        "longitude": lon,
        "acceptedItems": ["FOOD", "CLOTHING"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def store() -> InMemoryDonationPointStore:
    return InMemoryDonationPointStore()


def test_create_assigns_identity_and_keeps_coordinates(store):
    point = create_donation_point(_payload(), store)

    assert point.id
    assert point.latitude == 39.47
    assert point.longitude == -0.376
    assert point.accepted_items == ("FOOD", "CLOTHING")
    assert point.is_active is True
    assert point.created_at == point.updated_at == point.last_verification
    assert point.created_at.tzinfo is not None
    assert point.verified_at is None


def test_nearby_point_blocks_creation_without_force(store):
    existing = create_donation_point(_payload(), store)

    with pytest.raises(DuplicateConflict) as excinfo:
        create_donation_point(_payload(39.4705, -0.3755, name="Otra"), store)

    assert excinfo.value.existing == existing
    assert 0 < excinfo.value.distance_meters < 150
    assert len(store.find_many()) == 1


def test_force_creates_a_second_distinct_point(store):
    first = create_donation_point(_payload(), store)

    second = create_donation_point(_payload(), store, force=True)

    assert second.id != first.id
    assert {point.id for point in store.find_many()} == {first.id, second.id}


def test_inactive_points_still_block_creation(store):
    create_donation_point(_payload(isActive=False), store)

    with pytest.raises(DuplicateConflict):
        create_donation_point(_payload(), store)
    assert store.find_many() == []


def test_duplicate_box_bound_is_inclusive(store):
    create_donation_point(_payload(39.47, -0.376), store)

    with pytest.raises(DuplicateConflict):
        create_donation_point(_payload(39.471, -0.375), store)

    created = create_donation_point(_payload(39.4711, -0.376), store)
    assert created.latitude == 39.4711


def test_custom_radius_widens_the_search(store):
    create_donation_point(_payload(39.47, -0.376), store)

    with pytest.raises(DuplicateConflict):
        create_donation_point(_payload(39.475, -0.376), store, radius_degrees=0.01)


def test_invalid_payload_writes_nothing(store):
    payload = _payload()
    del payload["name"]

    with pytest.raises(ValidationError) as excinfo:
        create_donation_point(payload, store)

    assert [error.path for error in excinfo.value.errors] == [("name",)]
    assert store.find_many() == []


def test_persistence_error_propagates():
    class BrokenStore(InMemoryDonationPointStore):
        def create(self, point):
            raise PersistenceError("Failed to save donation point")

    with pytest.raises(PersistenceError):
        create_donation_point(_payload(), BrokenStore())


def test_guard_rejects_non_positive_radius(store):
    with pytest.raises(ValueError):
        DuplicateGuard(store, radius_degrees=0)


def test_guard_returns_none_when_area_is_free(store):
    create_donation_point(_payload(40.0, -3.0), store)

    assert DuplicateGuard(store).find_conflict(39.47, -0.376) is None


def test_parse_item_list_splits_and_normalizes():
    assert parse_item_list("food, CLOTHING,,food") == ("FOOD", "CLOTHING")
    assert parse_item_list(["tools"]) == ("TOOLS",)
    assert parse_item_list(None) == ()
    assert parse_item_list("") == ()


def test_list_ignores_blank_filters(store):
    create_donation_point(_payload(), store)

    assert len(list_donation_points(store, city="  ", province="", accepted_items="")) == 1
    assert list_donation_points(store, city="Alicante") == []
