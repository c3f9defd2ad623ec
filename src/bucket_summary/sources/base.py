from typing import Protocol


class ReportSource(Protocol):
    """Protocol for the collaborator that lists prefixes and produces reports.

    Implementations are bound to one bucket and must be all-or-nothing: a
    call either returns its complete result or raises ``TransportError``.
    """

    bucket: str

    def list_prefixes(self) -> list[str]:
        """Return the ordered prefixes to summarize."""
        ...

    def fetch_report(self, prefix: str) -> str:
        """Return the raw report text for one prefix."""
        ...
