"""Conversion rayon (mètres) -> boîte englobante en degrés."""
from typing import NamedTuple

# Approximation "terre plate" : valable pour de petits rayons, se dégrade près des pôles.
METERS_PER_DEGREE = 111319.9


class BoundingBox(NamedTuple):
    """Rectangle aligné sur les axes, en degrés (lon/lat)."""
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float


def meters_to_degrees(meters: float) -> float:
    """Convertit une distance en mètres en degrés (1° ≈ 111 319,9 m)."""
    return meters / METERS_PER_DEGREE


def calculate_bounding_box(center_lon: float, center_lat: float, meters: float) -> BoundingBox:
    """
    Calcule le carré centré sur (center_lon, center_lat) de demi-côté `meters`.

    Le même nombre de degrés est appliqué en longitude et en latitude, sans
    correction par cos(latitude).

    Args:
        center_lon: Longitude du centre
        center_lat: Latitude du centre
        meters: Demi-côté du carré en mètres

    Returns:
        BoundingBox (min_lon, min_lat, max_lon, max_lat)
    """
    degrees = meters_to_degrees(meters)
    return BoundingBox(
        min_lon=center_lon - degrees,
        min_lat=center_lat - degrees,
        max_lon=center_lon + degrees,
        max_lat=center_lat + degrees,
    )
