import json

from handlers import health_check


def test_health_check_returns_ok():
    resp = health_check.lambda_handler({}, None)
    assert resp["statusCode"] == 200
    assert "ok" in resp["body"]


def test_health_check_reports_stores(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("ACTIVITY_TABLE", "CustomerActivity-test")
    body = json.loads(health_check.lambda_handler({}, None)["body"])
    assert body["environment"] == "test"
    assert body["customerStore"] == "memory"
    assert body["activityStore"] == "dynamodb"
