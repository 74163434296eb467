from concurrent.futures import ThreadPoolExecutor

import database
from schemas import OrderInput
from services.order_service import OrderService
from conftest import NEW_ORDER


def create_in_own_session(index):
    session = database.SessionLocal()
    try:
        order = OrderService.create_order(
            session,
            client_id=1,
            order_input=OrderInput(product=f"Parcel {index}", coordinate=[40.7, -74.0]),
        )
        return order.id, order.tracking_number
    finally:
        session.close()


def test_concurrent_creates_get_distinct_ids(db_engine):
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(create_in_own_session, range(24)))

    ids = [order_id for order_id, _ in results]
    assert sorted(ids) == list(range(5, 29))
    assert len({tracking for _, tracking in results}) == 24


def test_concurrent_status_updates_leave_consistent_state(db_engine):
    statuses = ["processing", "loaded", "delivered", "cancelled"] * 5

    def update(status):
        session = database.SessionLocal()
        try:
            OrderService.update_status(session, 1, status)
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(update, statuses))

    session = database.SessionLocal()
    try:
        order = OrderService.get_order(session, 1)
        assert (order.actual_delivery is not None) == (order.status.value == "delivered")
    finally:
        session.close()


def test_concurrent_http_creates_get_distinct_ids(client, customer_headers):
    def post(index):
        body = dict(NEW_ORDER, product=f"Parcel {index}")
        return client.post("/cms/new-order", json={"order": body}, headers=customer_headers)

    with ThreadPoolExecutor(max_workers=8) as pool:
        responses = list(pool.map(post, range(16)))

    assert all(r.status_code == 201 for r in responses)
    orders = [r.json()["response"]["order"] for r in responses]
    assert sorted(o["id"] for o in orders) == list(range(5, 21))
    assert len({o["trackingNumber"] for o in orders}) == 16
