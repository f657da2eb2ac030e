import pytest
from fastapi.testclient import TestClient

from backend.main import create_app


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'usuarios.db'}"


@pytest.fixture
def client(database_url):
    app = create_app(database_url=database_url, bcrypt_rounds=4)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registro():
    """Registration body factory; keyword overrides replace fields."""

    def _build(**overrides):
        body = {
            "nombre": "A",
            "apellido": "B",
            "cedula": "1",
            "telefono": "555",
            "correo": "a@x.com",
            "contraseña": "pw1",
            "confirmar": "pw1",
        }
        body.update(overrides)
        return body

    return _build


@pytest.fixture
def registered(client, registro):
    """Register the default user and return its id."""
    response = client.post("/api/usuarios/registro", json=registro())
    assert response.status_code == 200
    return response.json()["id"]
