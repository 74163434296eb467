from datetime import datetime

import pytest

from models.order import OrderStatus
from services.order_service import tracking_number
from utils.distance import haversine_distance, path_length
from utils.sanitizer import DataSanitizer


@pytest.mark.parametrize("current,target,allowed", [
    ("pending", "processing", True),
    ("processing", "loaded", True),
    ("loaded", "delivered", True),
    ("pending", "cancelled", True),
    ("loaded", "cancelled", True),
    ("pending", "pending", True),
    ("pending", "loaded", False),
    ("processing", "pending", False),
    ("delivered", "cancelled", False),
    ("cancelled", "pending", False),
    ("delivered", "delivered", True),
])
def test_lifecycle_transitions(current, target, allowed):
    assert OrderStatus(current).can_transition_to(OrderStatus(target)) is allowed


def test_terminal_states():
    assert [s.value for s in OrderStatus if s.is_terminal] == ["delivered", "cancelled"]


def test_tracking_number_pads_small_ids():
    created = datetime(2024, 1, 15, 9, 0, 0)
    assert tracking_number(7, created) == "TRK-007-1705309200000"
    assert tracking_number(1234, created) == "TRK-1234-1705309200000"


def test_haversine_known_distance():
    # Manhattan to Brooklyn seed stops, roughly 9 km apart
    assert haversine_distance(40.7506, -73.9971, 40.6712, -73.9636) == pytest.approx(9.27, abs=0.1)


def test_path_length_of_short_paths():
    assert path_length([]) == 0
    assert path_length([(40.0, -74.0)]) == 0
    there = haversine_distance(40.0, -74.0, 41.0, -74.0)
    assert path_length([(40.0, -74.0), (41.0, -74.0), (40.0, -74.0)]) == pytest.approx(2 * there)


def test_sanitizer_redacts_secrets():
    data = {"username": "client1", "password": "demo123", "nested": {"accessToken": "abc"}}
    assert DataSanitizer.sanitize_dict(data) == {
        "username": "client1",
        "password": "[REDACTED]",
        "nested": {"accessToken": "[REDACTED]"},
    }
    assert DataSanitizer.sanitize_string("Authorization: Bearer abc.def.ghi") == "Authorization: Bearer [REDACTED]"
