"""Main module for the FastAPI application."""
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from .config import settings
from .db.postgres_connector import PostgresConnector
from .errors import QueryExecutionError, SpotsError, StoreUnavailable
from .logger import logger
from .models import ErrorResponse, Spot
from .spots.spot_service import SpotService
from .spots.validation import parse_area_query


# --- Initialisation des dépendances (une seule fois, au démarrage) ---

# Pool PostgreSQL, ouvert dans le lifespan
db_connector: PostgresConnector = PostgresConnector(
    settings.dsn,
    min_size=settings.DB_POOL_MIN_SIZE,
    max_size=settings.DB_POOL_MAX_SIZE,
    query_timeout=settings.QUERY_TIMEOUT_SECONDS,
)

spot_service: SpotService = SpotService(db_connector, settings)
# Alias `service` pour les tests qui patchent `main.service`
service = spot_service


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Handle FastAPI startup and shutdown events."""
    logger.info("Starting up spotfinder API...")

    # Si la base est indisponible, le service démarre quand même et répond 503
    try:
        await db_connector.connect()
        logger.info("PostgreSQL connection pool established successfully.")
    except StoreUnavailable as e:
        logger.error("Failed to connect to PostgreSQL: {error}", error=e)

    yield

    logger.info("Shutting down spotfinder API...")
    await db_connector.close()
    logger.info("PostgreSQL connection pool closed.")


app = FastAPI(
    title="spotfinder - Spots in area",
    lifespan=lifespan
)


@app.exception_handler(SpotsError)
async def spots_error_handler(request: Request, exc: SpotsError):
    """Convertit les erreurs métier en réponse JSON {"error": ...}."""
    if exc.status_code >= 500:
        logger.error("{path} -> {code}: {message}", path=request.url.path,
                     code=exc.status_code, message=exc.message)
    else:
        logger.warning("{path} -> {code}: {message}", path=request.url.path,
                       code=exc.status_code, message=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump()
    )


def get_service() -> SpotService:
    """Dépendance FastAPI pour obtenir l'instance du service de spots."""
    return service


@app.get(
    "/spots-in-area",
    response_model=List[Spot],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse},
               503: {"model": ErrorResponse}},
)
async def spots_in_area(
        latitude: Optional[str] = None,
        longitude: Optional[str] = None,
        radius: Optional[str] = None,
        is_circle: Optional[str] = Query(None, alias="isCircle"),
        svc: SpotService = Depends(get_service)):
    """
    GET /spots-in-area

    Les paramètres sont reçus bruts (chaînes) et validés par
    parse_area_query, pour que les erreurs 400 nomment le paramètre fautif.
    """
    try:
        query = parse_area_query(
            latitude, longitude, radius, is_circle,
            strict_bounds=svc.strict_bounds
        )
        return await svc.find_spots_in_area(query)
    except SpotsError:
        raise
    except Exception as e:
        logger.exception("Error processing /spots-in-area request")
        raise SpotsError("Internal server error") from e


@app.get("/")
def root():
    """Root endpoint to check API status."""
    return {"status": "ok", "message": "spotfinder API is running"}


@app.get("/health", status_code=status.HTTP_200_OK, tags=["Monitoring"])
async def health_check():
    """
    Health check endpoint.

    Returns 200 OK if the spatial store answers `SELECT 1`,
    otherwise 503 Service Unavailable.
    """
    services_status = {"database": "ok"}
    try:
        await db_connector.execute_query("SELECT 1")
    except (StoreUnavailable, QueryExecutionError):
        services_status["database"] = "error"
        logger.error("Health check failed: Database connection error.")

    if "error" in services_status.values():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=services_status)

    return services_status
