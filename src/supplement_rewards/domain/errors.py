"""Error types raised by the rewards engine."""


class StorageError(RuntimeError):
    """Raised when the entity store cannot read or durably write."""


class ValidationError(ValueError):
    """Raised when caller-supplied input is invalid."""


class InsufficientCoinsError(Exception):
    """Raised when a spend would exceed the available coin balance."""

    def __init__(self, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient coins: available={available}, requested={requested}"
        )
        self.available = available
        self.requested = requested
