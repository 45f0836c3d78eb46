"""
Tests for the function-per-route deployment.

Each function app mounts one router and shares token state with the
others only through the database.
Run: pytest tests/integration/test_serverless.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from fastapi.testclient import TestClient

from api import serverless
from api.routes.profile_form import router as profile_form_router
from api.routes.profiles import router as profiles_router
from api.routes.send_link import router as send_link_router
from api.routes.status import router as status_router
from api.routes.update_profile import router as update_profile_router
from services.token_registry import SqlTokenStore, TokenRegistry


@pytest.fixture
def function_client(app_factory, engine, clock):
    """One isolated app per router, all backed by the same database."""

    def factory(router, **setting_overrides):
        registry = TokenRegistry(store=SqlTokenStore(engine), clock=clock)
        app = app_factory(
            token_registry=registry,
            routers=[router],
            TOKEN_STORE="database",
            **setting_overrides,
        )
        return TestClient(app)

    return factory


class TestFunctionSettings:

    def test_forces_database_token_store(self, make_settings):
        settings = make_settings(TOKEN_STORE="memory", TOKEN_TTL_HOURS=12)
        converted = serverless.function_settings(settings)

        assert converted.TOKEN_STORE == "database"
        assert converted.TOKEN_TTL_HOURS == 12
        # Input settings are not mutated
        assert settings.TOKEN_STORE == "memory"

    @pytest.mark.parametrize(
        "app_name",
        ["send_upload_link_app", "profile_form_app", "update_profile_app", "profiles_app", "status_app"],
    )
    def test_module_apps_use_database_tokens(self, app_name):
        app = getattr(serverless, app_name)
        assert isinstance(app.state.token_registry.store, SqlTokenStore)
        assert app.state.settings.TOKEN_STORE == "database"


class TestRouteIsolation:

    def test_function_app_only_serves_its_route(self, function_client):
        client = function_client(status_router)

        assert client.get("/status/anything").status_code == 200
        assert client.get("/api/profiles").status_code == 404
        assert client.post("/send-upload-link", json={"recipientEmail": "a@example.com"}).status_code == 404

    def test_health_on_every_function(self, function_client):
        client = function_client(profiles_router)
        assert client.get("/health").json()["token_store"] == "database"


class TestCrossFunctionFlow:

    def test_token_issued_by_one_function_is_seen_by_others(self, function_client):
        send_link = function_client(send_link_router)
        status = function_client(status_router)
        form = function_client(profile_form_router)

        token = send_link.post("/send-upload-link", json={"recipientEmail": "bob@example.com"}).json()["token"]

        assert status.get(f"/status/{token}").json()["recipientEmail"] == "bob@example.com"
        assert form.get(f"/profile/{token}").status_code == 200

    def test_expiry_is_seen_across_functions(self, function_client, clock):
        send_link = function_client(send_link_router)
        form = function_client(profile_form_router)
        status = function_client(status_router)

        token = send_link.post("/send-upload-link", json={"recipientEmail": "bob@example.com"}).json()["token"]
        clock.advance(hours=25)

        assert form.get(f"/profile/{token}").status_code == 410
        # The form function evicted the row; the status function sees it as unknown
        assert status.get(f"/status/{token}").json() == {"valid": False, "message": "Invalid token"}

    def test_strict_submission_against_issued_token(self, function_client):
        send_link = function_client(send_link_router)
        update = function_client(update_profile_router, ALLOW_UNREGISTERED_TOKENS=False)
        profiles = function_client(profiles_router)

        token = send_link.post("/send-upload-link", json={"recipientEmail": "bob@example.com"}).json()["token"]

        response = update.post(
            "/api/update-profile",
            json={"token": token, "fullName": "Bob", "companyStatus": "yes"},
        )
        assert response.status_code == 200

        listed = profiles.get("/api/profiles").json()
        assert listed["count"] == 1
        assert listed["profiles"][0]["personalInfo"]["email"] == "bob@example.com"

    def test_strict_submission_unknown_token(self, function_client):
        update = function_client(update_profile_router, ALLOW_UNREGISTERED_TOKENS=False)
        response = update.post(
            "/api/update-profile",
            json={"token": "never-issued", "fullName": "Bob", "companyStatus": "yes"},
        )
        assert response.status_code == 404
