"""Classement des spots : distance, puis note à distance comparable."""
from functools import cmp_to_key
from typing import List

from spotfinder.models import Spot

DEFAULT_DISTANCE_BAND = 50.0


class Ranker:
    """
    Trie les spots avec un comparateur à deux niveaux.

    Si deux spots sont à moins de `band` mètres d'écart, le mieux noté passe
    devant ; sinon le plus proche passe devant. Le comparateur n'est pas
    transitif (10 m, 40 m, 70 m) : l'ordre obtenu dépend de l'algorithme de
    tri. `sorted` (Timsort) est stable, les égalités exactes gardent l'ordre
    renvoyé par la base.
    """

    def __init__(self, band: float = DEFAULT_DISTANCE_BAND):
        self.band = band

    def less(self, a: Spot, b: Spot) -> bool:
        """Vrai si `a` doit être placé avant `b`."""
        if abs(a.distance - b.distance) < self.band:
            return a.rating > b.rating
        return a.distance < b.distance

    def compare(self, a: Spot, b: Spot) -> int:
        if self.less(a, b):
            return -1
        if self.less(b, a):
            return 1
        return 0

    def rank(self, spots: List[Spot]) -> List[Spot]:
        return sorted(spots, key=cmp_to_key(self.compare))
