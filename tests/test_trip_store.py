import pytest

from fakes import FakeSupabase
from globesync.persistence.trips import StoreError, TripNotFoundError, TripStore

STORED_ROUTE = {"route_type": "road", "distance": 12.5}


def test_get_trip_maps_row():
    client = FakeSupabase(
        rows=[{"id": "trip-1", "basic_info": {"city": " Goa "}, "route_data": STORED_ROUTE, "map_center": [15.3, 74.1]}]
    )
    store = TripStore(client, table="chats")

    trip = store.get_trip("trip-1")

    assert client.tables == ["chats"]
    assert trip.trip_id == "trip-1"
    assert trip.city == "Goa"
    assert trip.route_data == STORED_ROUTE
    assert trip.map_center == (15.3, 74.1)


def test_get_trip_missing_and_empty_route():
    store = TripStore(FakeSupabase(rows=[{"id": "trip-2", "basic_info": None, "route_data": {}}]))

    assert store.get_trip("nope") is None
    trip = store.get_trip("trip-2")
    assert trip.route_data is None
    assert trip.city is None


def test_save_route_replaces_previous_route():
    client = FakeSupabase(rows=[{"id": "trip-1", "route_data": STORED_ROUTE, "map_center": [0, 0]}])
    store = TripStore(client)
    new_route = {"route_type": "road", "distance": 1408.4}

    store.save_route("trip-1", new_route, (23.8, 75.0))

    assert client.rows["trip-1"]["route_data"] == new_route
    assert client.rows["trip-1"]["map_center"] == [23.8, 75.0]
    assert client.updates == [({"id": "trip-1"}, {"route_data": new_route, "map_center": [23.8, 75.0]})]


def test_save_route_for_unknown_trip():
    with pytest.raises(TripNotFoundError):
        TripStore(FakeSupabase()).save_route("ghost", {"distance": 1.0})


def test_store_errors_are_wrapped():
    store = TripStore(FakeSupabase(rows=[{"id": "trip-1"}], fail=True))

    with pytest.raises(StoreError):
        store.get_trip("trip-1")
    with pytest.raises(StoreError):
        store.save_route("trip-1", {"distance": 1.0})
    assert store.ping() is False


def test_unconfigured_store_raises():
    store = TripStore(None)

    assert store.configured is False
    with pytest.raises(StoreError, match="not configured"):
        store.get_trip("trip-1")
