class DungeonKitError(Exception):
    """Base exception for the Dungeon Kit project."""


class InvalidConfigError(DungeonKitError, ValueError):
    """Raised when a generation config is rejected at the boundary.

    ``field`` names the offending config attribute so HTTP and CLI callers can
    point at it.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
