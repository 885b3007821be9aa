from backend.database.stores import Stores
from backend.gateway.server import create_app


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}
    assert client.get("/").get_json() == {"status": "gateway_ok"}


def test_unknown_route_returns_json_error(client):
    response = client.get("/api/v1/nowhere")
    assert response.status_code == 404
    assert "error" in response.get_json()


def test_method_not_allowed_returns_json_error(client):
    response = client.patch("/api/v1/events")
    assert response.status_code == 405
    assert "error" in response.get_json()


def test_unexpected_error_returns_generic_500(client, stores, mocker):
    mocker.patch.object(stores.events, "list_all", side_effect=RuntimeError("boom"))

    response = client.get("/api/v1/events")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal Server Error"}


def test_create_app_builds_postgres_stores(config):
    app = create_app(config)

    stores = app.extensions["stores"]
    assert isinstance(stores, Stores)
    assert stores.users.db.config is config
    assert app.extensions["token_issuer"].secret == "test_secret"
