"""
Exception hierarchy for the scorekeeper.

Rule outcomes (bust, invalid score, blocked undo) are never raised; they are
reported through TurnResult. Exceptions are reserved for misconfiguration
and for failures at the storage boundary.
"""


class DartScoreError(Exception):
    """Base class for all scorekeeper errors."""


class ConfigError(DartScoreError, ValueError):
    """Invalid match configuration or configuration file value."""


class PersistenceFailure(DartScoreError):
    """Statistics store could not record a finished match."""

    def __init__(self, message: str, match_id: object = None):
        super().__init__(message)
        self.match_id = match_id
