# tests/conftest.py
import pytest
from unittest.mock import MagicMock, AsyncMock

from spotfinder.config import Settings


# --- Mocks des clients de bas niveau ---

@pytest.fixture
def mock_db_connector():
    """Fixture pour un mock du connecteur PostgreSQL (aucune ligne par défaut)."""
    db_conn = MagicMock()
    db_conn.execute_query = AsyncMock(return_value=[])
    return db_conn


@pytest.fixture
def test_settings():
    """Configuration explicite, indépendante de l'environnement."""
    return Settings(
        DB_HOST="db.test", DB_PORT=5432, DB_USER="spots", DB_PASSWORD="secret",
        SPOTS_TABLE="public.MY_TABLE", RANK_DISTANCE_BAND=50.0, STRICT_BOUNDS=False,
    )


@pytest.fixture
def spot_row():
    """Fabrique de lignes telles que renvoyées par PostgresConnector.execute_query."""
    def _make(id_, distance, rating, name=None, website="", description=""):
        return {
            "id": str(id_),
            "name": name or f"Spot {id_}",
            "location": "0101000020E6100000000000000000F03F0000000000000040",
            "website": website,
            "description": description,
            "rating": rating,
            "distance": distance,
        }
    return _make


# --- Services de l'application ---

@pytest.fixture
def spot_service(mock_db_connector, test_settings):
    """Vrai SpotService branché sur un connecteur mocké."""
    from spotfinder.spots.spot_service import SpotService
    return SpotService(mock_db_connector, test_settings)


@pytest.fixture
def client(spot_service):
    """
    TestClient sur l'application, avec le service mocké.

    Le lifespan n'est pas lancé (pas de `with`), aucune connexion n'est ouverte.
    """
    from fastapi.testclient import TestClient
    from spotfinder import main

    original = main.service
    main.service = spot_service
    yield TestClient(main.app)
    main.service = original
