"""Custom exceptions for critpath."""


class CritPathError(Exception):
    """Base exception for all critpath errors."""

    pass


class ValidationError(CritPathError):
    """Raised when validation fails."""

    pass


class CycleError(ValidationError):
    """Raised when the activity graph contains a cycle."""

    def __init__(self, message: str = "Graph contains a cycle; CPM requires an acyclic graph"):
        super().__init__(message)


class InvalidMutationError(ValidationError):
    """Raised by a strict graph when a node or edge is rejected."""

    pass


class ParseError(CritPathError):
    """Raised when YAML parsing fails."""

    pass
