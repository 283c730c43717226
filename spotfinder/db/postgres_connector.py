"""PostgreSQL / PostGIS database connector."""
import asyncio
from typing import List, Dict, Any, Optional
import asyncpg

from spotfinder.errors import QueryExecutionError, StoreUnavailable
from spotfinder.logger import logger

# Erreurs indiquant que la base est injoignable (et non que la requête est fausse)
_CONNECTION_ERRORS = (
    OSError,
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.CannotConnectNowError,
    asyncpg.exceptions.TooManyConnectionsError,
    asyncpg.exceptions.ConnectionDoesNotExistError,
)


class PostgresConnector:
    """Gère un pool de connexions asynchrone à PostgreSQL."""

    def __init__(
            self,
            database_url: str,
            min_size: int = 1,
            max_size: int = 10,
            query_timeout: Optional[float] = None):
        self.database_url = database_url
        self.min_size = min_size
        self.max_size = max_size
        self.query_timeout = query_timeout
        self._pool: Optional[asyncpg.Pool] = None
        self._connect_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self):
        """
        Initialise le pool de connexions.

        Raises:
            StoreUnavailable: Si la base ne répond pas
        """
        async with self._connect_lock:
            if self._pool is not None:
                return
            try:
                self._pool = await asyncpg.create_pool(
                    dsn=self.database_url,
                    min_size=self.min_size,
                    max_size=self.max_size,
                )
            except (*_CONNECTION_ERRORS,
                    asyncio.TimeoutError,
                    asyncpg.exceptions.InvalidAuthorizationSpecificationError,
                    asyncpg.exceptions.InvalidCatalogNameError) as e:
                logger.error("Cannot connect to spatial store: {error!r}", error=e)
                raise StoreUnavailable("Spatial store unavailable") from e
            logger.info("asyncpg pool initialised (max_size={max_size})", max_size=self.max_size)

    async def execute_query(self, sql: str, *args) -> List[Dict[str, Any]]:
        """
        Exécute une requête SQL paramétrée et renvoie les lignes en dictionnaires.

        Si le pool n'a pas pu être créé au démarrage, une nouvelle tentative
        de connexion est faite ici.

        Raises:
            StoreUnavailable: Base injoignable
            QueryExecutionError: Erreur SQL ou dépassement du délai
        """
        if self._pool is None:
            await self.connect()

        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(sql, *args, timeout=self.query_timeout)
        # TimeoutError hérite d'OSError depuis Python 3.11 : à traiter en premier
        except asyncio.TimeoutError as e:
            raise QueryExecutionError("Query timed out") from e
        except _CONNECTION_ERRORS as e:
            logger.error("Spatial store connection lost: {error!r}", error=e)
            raise StoreUnavailable("Spatial store unavailable") from e
        except asyncpg.PostgresError as e:
            logger.error("Spatial store rejected query: {error!r}", error=e)
            raise QueryExecutionError("Query execution failed") from e
        return [dict(row) for row in rows]

    async def close(self):
        """Ferme le pool de connexions proprement."""
        if self._pool:
            await self._pool.close()
            self._pool = None
