from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from restaurant_platform.restaurant_service.models import utcnow


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ready_with_database(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_ready_without_database(client):
    with patch("restaurant_platform.restaurant_service.routes.health.check_db_connection", return_value=False):
        response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["detail"]["status"] == "not_ready"


def test_health_timestamp_is_utc_aware(client):
    timestamp = datetime.fromisoformat(client.get("/health").json()["timestamp"])
    assert timestamp.utcoffset() == timedelta(0)


def test_model_timestamps_are_naive_utc():
    stamp = utcnow()
    assert stamp.tzinfo is None
    assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - stamp) < timedelta(minutes=1)
