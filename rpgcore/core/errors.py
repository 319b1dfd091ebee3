"""
Exception hierarchy for the rules core.
"""


class RulesError(Exception):
    """Base class for every error raised by the rules core."""


class UnknownArchetypeError(RulesError, KeyError):
    """Raised when a race, class or subtype name is not in the registry."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"Unknown {kind}: {name!r}")

    def __str__(self) -> str:
        return f"Unknown {self.kind}: {self.name!r}"


class InvalidArchetypeError(RulesError, ValueError):
    """Raised for impossible combinations, such as a class the race cannot take."""


class ArchetypeDataError(RulesError, ValueError):
    """Raised when an archetype data file is missing or malformed."""


class InvalidActionError(RulesError, ValueError):
    """Raised when an action descriptor cannot be resolved, such as healing with a damage spell."""
