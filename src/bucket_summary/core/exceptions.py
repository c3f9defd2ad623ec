"""Exception hierarchy for bucket-summary."""


class BucketSummaryError(Exception):
    """Base exception for all bucket-summary errors."""

    pass


class ValidationError(BucketSummaryError):
    """Raised when validation fails."""

    pass


class TransportError(BucketSummaryError):
    """Raised when an external collaborator fails to deliver data.

    Covers non-zero process exits, output on the error stream, timeouts and
    storage SDK failures.
    """

    pass


class MalformedReportError(BucketSummaryError):
    """Raised when a report line matches neither the header nor content shape."""

    pass


class StructuralMismatchError(BucketSummaryError):
    """Raised when a parsed report lacks exactly one of each header row."""

    pass


class DivisionByZeroError(BucketSummaryError):
    """Raised when a prefix reports zero objects and no average exists."""

    pass


class LabelCollisionError(ValidationError):
    """Raised when two prefixes derive the same output label."""

    pass
