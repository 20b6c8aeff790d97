"""Exception types for the OFC Pineapple engine."""


class OFCError(Exception):
    """Base class for engine errors."""


class InputError(OFCError, ValueError):
    """A function was called with input that breaks its contract.

    Raised for programmer errors such as evaluating a 4-card hand or parsing
    a malformed card string. Never raised for player mistakes.
    """


class InvalidActionError(OFCError):
    """A player's turn was rejected. Nothing was applied."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class GameStateError(OFCError):
    """An operation is not allowed in the room's current state."""


class ConfigError(OFCError, ValueError):
    """A configuration value could not be used."""
