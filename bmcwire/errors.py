"""Exceptions raised while decoding wire data."""


class DecodeError(ValueError):
    """Raised when bytes cannot be decoded into the expected structure.

    ``truncated`` is true when the data was too short, as opposed to
    holding invalid values.
    """

    def __init__(self, message: str, *, truncated: bool = False) -> None:
        super().__init__(message)
        self.truncated = truncated