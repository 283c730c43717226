"""Construction des requêtes spatiales (PostGIS) paramétrées."""
import re
from typing import Any, List, Tuple

from spotfinder.geo.bounding_box import calculate_bounding_box
from spotfinder.models import AreaQuery

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Colonnes renvoyées, dans l'ordre des champs de Spot
_SELECT_COLUMNS = """
    id::text AS id,
    name,
    coordinates::text AS location,
    COALESCE(website, '') AS website,
    COALESCE(description, '') AS description,
    rating::float8 AS rating,
    ST_Distance(coordinates::geography, ST_SetSRID(ST_MakePoint($1, $2), 4326)::geography) AS distance"""


def quote_table_name(table: str) -> str:
    """
    Valide et cite un nom de table `schema.table` (ou `table`).

    Le nom vient de la configuration ; chaque partie doit être un identifiant
    SQL simple, puis est entourée de guillemets doubles.

    Raises:
        ValueError: Si le nom n'est pas un identifiant valide
    """
    parts = table.split(".")
    if not 1 <= len(parts) <= 2 or not all(_IDENTIFIER.match(p) for p in parts):
        raise ValueError(f"Invalid table name: {table!r}")
    return ".".join(f'"{p}"' for p in parts)


def build_circle_query(table: str, query: AreaQuery) -> Tuple[str, List[Any]]:
    """Spots à moins de `radius` mètres (géodésique) du centre."""
    sql = (
        f"SELECT {_SELECT_COLUMNS}\n"
        f"FROM {quote_table_name(table)}\n"
        "WHERE ST_DWithin(coordinates::geography, "
        "ST_SetSRID(ST_MakePoint($1, $2), 4326)::geography, $3)"
    )
    return sql, [query.longitude, query.latitude, query.radius]


def build_square_query(table: str, query: AreaQuery) -> Tuple[str, List[Any]]:
    """
    Spots contenus dans la boîte englobante du centre.

    Test d'enveloppe planaire (geometry, SRID 4326) ; la distance reste
    géodésique pour le classement.
    """
    box = calculate_bounding_box(query.longitude, query.latitude, query.radius)
    sql = (
        f"SELECT {_SELECT_COLUMNS}\n"
        f"FROM {quote_table_name(table)}\n"
        "WHERE ST_Intersects(coordinates::geometry, ST_MakeEnvelope($3, $4, $5, $6, 4326))"
    )
    return sql, [query.longitude, query.latitude, *box]


def build_area_query(table: str, query: AreaQuery) -> Tuple[str, List[Any]]:
    """
    Construit la requête SQL et ses paramètres selon la forme demandée.

    Toutes les valeurs numériques sont passées en paramètres ($1..$n),
    jamais interpolées dans le SQL.

    Args:
        table: Nom de la table des spots (configuration)
        query: Paramètres validés

    Returns:
        Tuple[str, List[Any]]: (sql, args) pour PostgresConnector.execute_query
    """
    if query.is_circle:
        return build_circle_query(table, query)
    return build_square_query(table, query)
