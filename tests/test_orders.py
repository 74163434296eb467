import re
from datetime import datetime, timezone

import pytest

from config import settings
from models.log import ActivityLog
from conftest import OTHER_CUSTOMER, bearer, create_order, customer_orders, login

STATUSES = ["pending", "processing", "loaded", "delivered", "cancelled"]


def test_new_order_is_pending_and_unassigned(client, customer_headers):
    order = create_order(client, customer_headers)

    assert order["status"] == "pending"
    assert order["assignedDriverId"] is None
    assert order["actualDelivery"] is None
    assert order["client_id"] == 1
    assert order["route_id"] == 1
    assert order["priority"] == "standard"
    assert order["coordinate"] == {"lat": 40.7128, "lng": -74.0060}
    assert re.fullmatch(r"TRK-\d{3,}-\d+", order["trackingNumber"])


def test_new_order_response_shape(client, customer_headers):
    response = client.post(
        "/cms/new-order",
        json={"order": {"product": "Lamp", "coordinate": {"lat": 40.0, "lng": -73.0}, "priority": "urgent"}},
        headers=customer_headers,
    )

    assert response.status_code == 201
    body = response.json()["response"]
    assert body["status"] == "success"
    assert body["message"] == "Order created successfully"
    assert body["order"]["priority"] == "urgent"


def test_estimated_delivery_is_one_day_after_creation(client, customer_headers):
    order = create_order(client, customer_headers)
    created = datetime.fromisoformat(order["created_at"])
    estimated = datetime.fromisoformat(order["estimatedDelivery"])
    assert (estimated - created).total_seconds() == 24 * 60 * 60


def test_tracking_number_embeds_id_and_creation_time(client, customer_headers):
    order = create_order(client, customer_headers)
    prefix, padded_id, epoch_ms = order["trackingNumber"].split("-")
    assert prefix == "TRK"
    assert int(padded_id) == order["id"]
    created = datetime.fromisoformat(order["created_at"]).replace(tzinfo=timezone.utc)
    assert int(epoch_ms) == int(created.timestamp() * 1000)


def test_ids_increase_and_tracking_numbers_are_unique(client, customer_headers):
    first = create_order(client, customer_headers)
    second = create_order(client, customer_headers)
    third = create_order(client, bearer(login(client, OTHER_CUSTOMER)))

    assert first["id"] == 5  # four seeded orders
    assert first["id"] < second["id"] < third["id"]
    assert len({first["trackingNumber"], second["trackingNumber"], third["trackingNumber"]}) == 3


def test_created_order_matches_listed_order(client, customer_headers):
    created = create_order(client, customer_headers, weight=2.5, dimensions="30cm x 20cm x 15cm", deliveryNotes="Ring twice")

    listed = [o for o in customer_orders(client, customer_headers) if o["id"] == created["id"]]
    assert listed == [created]


def test_customer_sees_only_own_orders_in_insertion_order(client, customer_headers):
    create_order(client, bearer(login(client, OTHER_CUSTOMER)))
    mine = create_order(client, customer_headers)

    orders = customer_orders(client, customer_headers)
    assert [o["id"] for o in orders] == [1, 2, mine["id"]]
    assert all(o["client_id"] == 1 for o in orders)


@pytest.mark.parametrize("body", [
    {},
    {"order": None},
    {"order": {"product": "No coordinate"}},
])
def test_order_without_coordinate_is_rejected(client, customer_headers, body):
    response = client.post("/cms/new-order", json=body, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["status"] == "error"
    assert response.json()["message"] == "Order data with coordinate is required"


@pytest.mark.parametrize("order", [
    {"product": "Bad", "coordinate": [40.7]},
    {"product": "Bad", "coordinate": [140.7, -74.0]},
    {"product": "Bad", "coordinate": [40.7, -74.0], "quantity": 0},
    {"product": "Bad", "coordinate": [40.7, -74.0], "priority": "overnight"},
])
def test_malformed_order_fields_are_rejected(client, customer_headers, order):
    response = client.post("/cms/new-order", json={"order": order}, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


def test_unknown_route_is_not_found(client, customer_headers):
    response = client.post("/cms/new-order", json={"order": {"product": "x", "coordinate": [1, 2], "route": 99}}, headers=customer_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"


def test_rejected_order_does_not_consume_an_id(client, customer_headers):
    client.post("/cms/new-order", json={"order": {"product": "x", "coordinate": [1, 2], "route": 99}}, headers=customer_headers)
    assert create_order(client, customer_headers)["id"] == 5


def test_delivered_status_sets_actual_delivery(client, customer_headers, driver_headers):
    order = create_order(client, customer_headers)

    response = client.put(f"/wms/updateOrderStatus/{order['id']}/delivered", headers=driver_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "success"
    updated = next(o for o in customer_orders(client, customer_headers) if o["id"] == order["id"])
    assert updated["status"] == "delivered"
    assert updated["actualDelivery"] is not None


def test_repeating_a_status_update_is_idempotent(client, customer_headers):
    order = create_order(client, customer_headers)
    url = f"/wms/updateOrderStatus/{order['id']}/delivered"

    client.put(url, headers=customer_headers)
    first = next(o for o in customer_orders(client, customer_headers) if o["id"] == order["id"])
    client.put(url, headers=customer_headers)
    second = next(o for o in customer_orders(client, customer_headers) if o["id"] == order["id"])

    assert first == second


def test_leaving_delivered_clears_actual_delivery(client, customer_headers):
    client.put("/wms/updateOrderStatus/1/delivered", headers=customer_headers)
    client.put("/wms/updateOrderStatus/1/pending", headers=customer_headers)

    order = next(o for o in customer_orders(client, customer_headers) if o["id"] == 1)
    assert order["status"] == "pending"
    assert order["actualDelivery"] is None


def test_invalid_status_is_rejected_and_order_unchanged(client, customer_headers):
    before = customer_orders(client, customer_headers)

    response = client.put("/wms/updateOrderStatus/1/bogus", headers=customer_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "InvalidStatusValue"
    for status in STATUSES:
        assert status in body["message"]
    assert customer_orders(client, customer_headers) == before


def test_invalid_status_wins_over_unknown_order(client, customer_headers):
    response = client.put("/wms/updateOrderStatus/999/bogus", headers=customer_headers)
    assert response.status_code == 400


def test_unknown_order_is_not_found(client, customer_headers):
    response = client.put("/wms/updateOrderStatus/999/delivered", headers=customer_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Order 999 not found"


def test_non_numeric_order_id_is_a_validation_error(client, customer_headers):
    response = client.put("/wms/updateOrderStatus/abc/delivered", headers=customer_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


def test_status_update_requires_token(client):
    assert client.put("/wms/updateOrderStatus/1/delivered").status_code == 401


def test_lax_transitions_allow_backward_jumps_by_default(client, customer_headers):
    client.put("/wms/updateOrderStatus/2/delivered", headers=customer_headers)
    response = client.put("/wms/updateOrderStatus/2/pending", headers=customer_headers)
    assert response.status_code == 200


class TestStrictTransitions:
    @pytest.fixture(autouse=True)
    def strict(self, monkeypatch):
        monkeypatch.setattr(settings, "strict_status_transitions", True)

    def status_of(self, client, headers, order_id):
        return next(o for o in customer_orders(client, headers) if o["id"] == order_id)["status"]

    def test_forward_path_is_allowed(self, client, customer_headers):
        for status in ["processing", "loaded", "delivered"]:
            response = client.put(f"/wms/updateOrderStatus/1/{status}", headers=customer_headers)
            assert response.status_code == 200, response.text
        assert self.status_of(client, customer_headers, 1) == "delivered"

    def test_skipping_a_step_is_rejected(self, client, customer_headers):
        response = client.put("/wms/updateOrderStatus/1/delivered", headers=customer_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidStatusTransition"
        assert self.status_of(client, customer_headers, 1) == "pending"

    def test_terminal_states_are_final(self, client, customer_headers):
        assert client.put("/wms/updateOrderStatus/1/cancelled", headers=customer_headers).status_code == 200
        assert client.put("/wms/updateOrderStatus/1/pending", headers=customer_headers).status_code == 400
        assert client.put("/wms/updateOrderStatus/1/cancelled", headers=customer_headers).status_code == 200

    def test_driver_patch_follows_the_same_rules(self, client, customer_headers, driver_headers):
        response = client.patch(
            "/api/driver/orders/1",
            json={"status": "delivered", "driverNotes": "Left at the door"},
            headers=driver_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidStatusTransition"
        order = next(o for o in customer_orders(client, customer_headers) if o["id"] == 1)
        assert order["status"] == "pending"
        assert order["driverNotes"] is None
        assert order["actualDelivery"] is None


def test_mutations_are_audited(client, customer_headers, db):
    order = create_order(client, customer_headers)
    client.put(f"/wms/updateOrderStatus/{order['id']}/processing", headers=customer_headers)

    entries = db.query(ActivityLog).filter(ActivityLog.entity_id == order["id"]).order_by(ActivityLog.id).all()
    assert [e.action for e in entries] == ["order_created", "status_updated"]
    assert entries[0].user_id == 1
