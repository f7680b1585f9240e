class DelveError(Exception):
    """Base exception for the delve project."""


class GenerationError(DelveError):
    """Raised when a level cannot be generated (e.g., no floor left for stairs)."""


class RoutingError(GenerationError):
    """Raised when the corridor search cannot reach its goal.

    The routing graph is always connected, so this signals a broken cost or
    neighbor function rather than an unlucky layout; it is never retried.
    """
