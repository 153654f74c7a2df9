"""Domain errors raised by the services layer"""


class GameCfgError(Exception):
    """Base class for errors with an HTTP status mapping"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GameCfgError):
    """Malformed or missing required input"""

    status_code = 400


class UnsupportedMediaError(ValidationError):
    """Upload type or extension not allowed, or payload too large"""


class NotFoundError(GameCfgError):
    """Referenced entity does not exist"""

    status_code = 404


class InternalError(GameCfgError):
    """Store or filesystem fault"""

    status_code = 500
