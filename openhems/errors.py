"""Error type raised by the energy manager."""


class OpenHemsError(Exception):
    """Raised when configuration or runtime state is invalid."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message