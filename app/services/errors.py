"""Typed failures raised by the standings resolver and aggregators.

They never leave the service boundary: ``app.services.standings`` turns
them into failure envelopes.
"""


class StandingsError(Exception):
    """Base class. ``code`` is the stable machine-readable error kind."""

    code = "standings_error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)
        self.message = message or self.code


class NoSeasonAvailable(StandingsError):
    """No season is current and none has ended yet."""

    code = "no_season_available"


class AmbiguousSelection(StandingsError):
    """The filters do not narrow down to a single sport category."""

    code = "ambiguous_selection"


class StageNotFound(StandingsError):
    code = "stage_not_found"

    def __init__(self, message: str | None = None, stage_id: int | None = None):
        super().__init__(message)
        self.stage_id = stage_id


class DataSourceUnavailable(StandingsError):
    """Wraps a failure of the underlying database."""

    code = "data_source_unavailable"
