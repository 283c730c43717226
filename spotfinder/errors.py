"""Exceptions métier, converties en réponses HTTP à la frontière de la requête."""


class SpotsError(Exception):
    """Erreur de base du service. `status_code` est le code HTTP renvoyé."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParameter(SpotsError):
    """Paramètre de requête absent, illisible ou hors domaine."""

    status_code = 400

    def __init__(self, parameter: str, message: str):
        super().__init__(message)
        self.parameter = parameter


class StoreUnavailable(SpotsError):
    """La base spatiale est injoignable (pool absent, connexion refusée...)."""

    status_code = 503


class QueryExecutionError(SpotsError):
    """La requête a échoué côté base (erreur SQL, timeout)."""

    status_code = 500


class SerializationError(SpotsError):
    """Une ligne renvoyée par la base n'a pas la forme d'un Spot."""

    status_code = 500
