def test_route_catalog_is_public_and_complete(client):
    response = client.get("/routes")

    assert response.status_code == 200
    routes = response.json()
    assert [r["id"] for r in routes] == [1, 2, 3, 4, 5, 6, 7]
    assert routes[0] == {
        "id": 1,
        "name": "Manhattan Route",
        "description": "Central Manhattan and surrounding areas",
        "active": True,
    }


def test_active_filter_hides_suspended_routes(client):
    routes = client.get("/routes", params={"active": "true"}).json()

    assert len(routes) == 6
    assert all(r["active"] for r in routes)
    assert 7 not in [r["id"] for r in routes]


def test_orders_may_reference_a_route(client, customer_headers):
    from conftest import create_order

    order = create_order(client, customer_headers, route=6)
    assert order["route_id"] == 6


def test_inactive_filter_lists_only_suspended_routes(client):
    routes = client.get("/routes", params={"active": "false"}).json()

    assert [r["id"] for r in routes] == [7]
    assert routes[0]["active"] is False


def test_schema_from_route_row(db):
    from models.route import Route
    from schemas import RouteResponse

    route = db.get(Route, 7)
    assert RouteResponse.model_validate(route).model_dump() == {
        "id": 7,
        "name": route.name,
        "description": route.description,
        "active": False,
    }
