"""
API tests: outcome tags map onto HTTP status codes.

Services run over the in-memory store and fake mailer.
"""

import pytest
from fastapi.testclient import TestClient

from amplify.config import Settings
from amplify.main import build_services, create_app


@pytest.fixture
def api_settings():
    return Settings(
        _env_file=None,
        resend_api_key="re_test",
        email_from="news@example.com",
        allow_sqlite_fallback=True,
    )


@pytest.fixture
def client(memory_store, make_mailer, api_settings):
    services = build_services(memory_store, make_mailer("bad@x.com"), api_settings)
    with TestClient(create_app(services=services)) as test_client:
        yield test_client


@pytest.fixture
def seeded(memory_store):
    memory_store.seed(
        "email_templates",
        {"id": "tpl_1", "name": "T", "subject": "Hi", "content": "Hi {{first_name}}", "variables": ["first_name"]},
    )
    memory_store.seed(
        "email_campaigns",
        {
            "id": "cmp_1",
            "name": "Launch",
            "template_id": "tpl_1",
            "status": "draft",
            "scheduled_at": "2026-11-01T09:00:00Z",
            "target_audience": {"segment": "vip"},
        },
    )
    for cid, email in (("c1", "a@x.com"), ("c2", "bad@x.com"), ("c3", "c@x.com")):
        memory_store.seed("contacts", {"id": cid, "email": email, "first_name": cid, "segment": "vip"})
    return memory_store


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestSocialEndpoints:
    """Tests for /social routes"""

    def test_create_post_returns_201(self, client):
        response = client.post("/social/posts", json={"platform": "x", "content": "hello"})

        assert response.status_code == 201
        assert response.json()["content"] == "hello"

    def test_invalid_post_returns_422_with_issues(self, client):
        response = client.post("/social/posts", json={"content": "hello"})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["code"] == "VALIDATION_ERROR"
        assert detail["details"]["issues"] == [{"path": "platform", "reason": "missing"}]

    def test_schedule_without_time_returns_409(self, client):
        response = client.post("/social/posts/schedule", json={"platform": "x", "content": "c"})

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "SCHEDULE_REQUIRED"

    def test_schedule_defaults_status(self, client):
        response = client.post(
            "/social/posts/schedule",
            json={"platform": "x", "content": "c", "scheduled_at": "2026-11-01T09:00:00Z"},
        )

        assert response.status_code == 201
        assert response.json()["status"] == "scheduled"

    def test_unknown_post_returns_404(self, client):
        response = client.get("/social/posts/ghost")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NOT_FOUND"

    def test_interaction_takes_post_id_from_path(self, client):
        response = client.post("/social/posts/p1/interactions", json={"type": "share"})

        assert response.status_code == 201
        assert response.json()["post_id"] == "p1"


class TestEmailEndpoints:
    """Tests for /email routes"""

    def test_create_template(self, client):
        response = client.post(
            "/email/templates",
            json={"name": "T", "subject": "S", "content": "C", "variables": []},
        )

        assert response.status_code == 201
        assert response.json()["id"]

    def test_send_campaign_reports_counts(self, client, seeded):
        response = client.post("/email/campaigns/cmp_1/send")

        assert response.status_code == 200
        body = response.json()
        assert (body["attempted"], body["succeeded"], body["failed"]) == (3, 2, 1)
        assert seeded.collections["email_campaigns"]["cmp_1"]["status"] == "sent"

    def test_send_with_missing_template_returns_409(self, client, seeded):
        seeded.collections["email_campaigns"]["cmp_1"]["template_id"] = "tpl_gone"

        response = client.post("/email/campaigns/cmp_1/send")

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "TEMPLATE_NOT_FOUND"

    def test_send_unknown_campaign_returns_404(self, client):
        response = client.post("/email/campaigns/nope/send")

        assert response.status_code == 404
