"""Validation des paramètres bruts de /spots-in-area."""
import math
from typing import Optional

from spotfinder.errors import InvalidParameter
from spotfinder.models import AreaQuery, ShapeMode


def _parse_number(name: str, raw: Optional[str]) -> float:
    """
    Convertit une chaîne en nombre décimal fini.

    Raises:
        InvalidParameter: Si la valeur est absente, illisible, nan ou infinie
    """
    if raw is None or not raw.strip():
        raise InvalidParameter(name, f"Missing value for {name} parameter")
    try:
        value = float(raw)
    except ValueError as e:
        raise InvalidParameter(name, f"Invalid value for {name} parameter: {raw!r}") from e
    if not math.isfinite(value):
        raise InvalidParameter(name, f"Invalid value for {name} parameter: {raw!r}")
    return value


def _parse_shape(raw: Optional[str]) -> ShapeMode:
    mode = (raw or "").strip().lower()
    try:
        return ShapeMode(mode)
    except ValueError as e:
        raise InvalidParameter(
            "isCircle",
            f"Invalid value for isCircle parameter: {raw!r} (expected 'circle' or 'square')"
        ) from e


def _check_bounds(query: AreaQuery) -> None:
    if not -90.0 <= query.latitude <= 90.0:
        raise InvalidParameter("latitude", "latitude must be between -90 and 90")
    if not -180.0 <= query.longitude <= 180.0:
        raise InvalidParameter("longitude", "longitude must be between -180 and 180")
    if query.radius <= 0:
        raise InvalidParameter("radius", "radius must be greater than 0")


def parse_area_query(
        latitude: Optional[str],
        longitude: Optional[str],
        radius: Optional[str],
        shape_mode: Optional[str],
        strict_bounds: bool = False) -> AreaQuery:
    """
    Valide les quatre paramètres de la requête et construit un AreaQuery.

    Les paramètres sont contrôlés dans l'ordre latitude, longitude, radius,
    isCircle ; la première erreur est levée.

    Args:
        latitude: Latitude brute
        longitude: Longitude brute
        radius: Rayon brut, en mètres
        shape_mode: "circle" ou "square", sans tenir compte de la casse
        strict_bounds: Active le contrôle des plages lat/lon et rayon > 0

    Returns:
        AreaQuery: Les paramètres typés

    Raises:
        InvalidParameter: Au premier paramètre invalide
    """
    query = AreaQuery(
        latitude=_parse_number("latitude", latitude),
        longitude=_parse_number("longitude", longitude),
        radius=_parse_number("radius", radius),
        shape=_parse_shape(shape_mode),
    )
    if strict_bounds:
        _check_bounds(query)
    return query
