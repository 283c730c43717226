"""Service de recherche des spots dans une zone."""
from typing import Any, Dict, List

from pydantic import ValidationError

from spotfinder.config import Settings
from spotfinder.errors import QueryExecutionError, SerializationError
from spotfinder.logger import logger
from spotfinder.models import AreaQuery, Spot
from spotfinder.scoring.ranking import Ranker
from spotfinder.spots.query_builder import build_area_query

PostgresConnector = Any


class SpotService:
    """
    Orchestration d'une requête de zone.

    AreaQuery -> SQL paramétré -> exécution -> Spot -> classement.
    Aucun état n'est partagé entre requêtes en dehors du pool de connexions.
    """

    def __init__(self, db_connector: PostgresConnector, config: Settings):
        self.db = db_connector
        self.table = config.SPOTS_TABLE
        self.strict_bounds = config.STRICT_BOUNDS
        self.ranker = Ranker(band=config.RANK_DISTANCE_BAND)

    @staticmethod
    def _to_spots(rows: List[Dict[str, Any]]) -> List[Spot]:
        """
        Convertit les lignes de la base en Spot.

        Raises:
            SerializationError: Si une ligne n'a pas la forme attendue
        """
        spots = []
        for row in rows:
            try:
                spots.append(Spot.model_validate(row))
            except ValidationError as e:
                raise SerializationError(
                    f"Unexpected row shape from spatial store ({e.error_count()} error(s))"
                ) from e
        return spots

    async def find_spots_in_area(self, query: AreaQuery) -> List[Spot]:
        """
        Renvoie les spots de la zone, classés par distance puis note.

        Args:
            query: Paramètres validés

        Returns:
            List[Spot]: Spots classés (liste vide si aucun résultat)

        Raises:
            StoreUnavailable, QueryExecutionError, SerializationError
        """
        sql, args = build_area_query(self.table, query)
        try:
            rows = await self.db.execute_query(sql, *args)
        except QueryExecutionError:
            # Le SQL reste côté serveur : seul le contexte est journalisé
            logger.error(
                "Area query failed (shape={shape}, lat={lat}, lon={lon}, radius={radius})",
                shape=query.shape.value, lat=query.latitude,
                lon=query.longitude, radius=query.radius
            )
            raise

        ranked = self.ranker.rank(self._to_spots(rows))

        for spot in ranked:
            logger.debug(
                "Spot: Name={name}, Distance={distance:.2f}, Rating={rating:.2f}",
                name=spot.name, distance=spot.distance, rating=spot.rating
            )
        logger.info(
            "{count} spot(s) found ({shape}, lat={lat}, lon={lon}, radius={radius})",
            count=len(ranked), shape=query.shape.value, lat=query.latitude,
            lon=query.longitude, radius=query.radius
        )
        return ranked
