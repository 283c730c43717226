"""Modèles Pydantic et structures de requête."""
from dataclasses import dataclass
from enum import Enum
from pydantic import BaseModel


class ShapeMode(str, Enum):
    """Forme de la zone interrogée."""
    CIRCLE = "circle"
    SQUARE = "square"


@dataclass(frozen=True)
class AreaQuery:
    """Paramètres validés d'une requête /spots-in-area."""
    latitude: float
    longitude: float
    radius: float
    shape: ShapeMode

    @property
    def is_circle(self) -> bool:
        return self.shape is ShapeMode.CIRCLE


class Spot(BaseModel): # pylint: disable=too-few-public-methods
    """
    Point d'intérêt renvoyé par une requête de zone.

    `distance` (mètres, géodésique) est calculée par la base pour le centre
    de la requête courante : elle n'a de sens que pour cette requête.
    """
    id: str
    name: str
    location: str
    website: str = ""
    description: str = ""
    rating: float
    distance: float


class ErrorResponse(BaseModel): # pylint: disable=too-few-public-methods
    """Corps JSON des réponses d'erreur."""
    error: str
