"""Exception types raised at the system boundary.

The matching core never raises; every fault below comes from a collaborator
(network fetch, dataset read, report read, configuration) and aborts the run.
"""


class PlayletLinkError(Exception):
    """Base class for all run-aborting faults."""
    pass


class ConfigError(PlayletLinkError):
    """Raised when a configuration value cannot be parsed."""
    pass


class RankingFetchError(PlayletLinkError):
    """Raised when the ranking endpoint cannot be reached or answers with an error status."""
    pass


class RankingFormatError(PlayletLinkError):
    """Raised when the ranking response is not the expected JSON shape."""
    pass


class DatasetNotFoundError(PlayletLinkError):
    """Raised when the CSV dataset file does not exist."""
    pass


class DatasetFormatError(PlayletLinkError):
    """Raised when the CSV dataset cannot be decoded or parsed."""
    pass


class ReportFormatError(PlayletLinkError):
    """Raised when a saved report is not valid JSON."""
    pass
