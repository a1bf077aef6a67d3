"""Exception types raised by data sources and the navigation core.

Fetch failures are converted to folder ``LOAD_ERROR`` state at the expansion
boundary; they never escape into the node store or the search filter.
"""

from __future__ import annotations


class FaultNavError(Exception):
    """Base class for all faultnav errors."""


class FetchError(FaultNavError):
    """A data collection could not be fetched.

    ``status`` carries the HTTP status code when one is known and ``cause`` the
    underlying exception, if any.
    """

    def __init__(
        self,
        source_id: str,
        message: str = "",
        *,
        status: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.source_id = source_id
        self.status = status
        self.cause = cause
        detail = message or (str(cause) if cause is not None else "fetch failed")
        if status is not None:
            detail = f"{detail} (status {status})"
        super().__init__(f"{source_id}: {detail}")


class ParseError(FetchError):
    """A fetched collection was not valid JSON or not a descriptor list."""

    def __init__(self, source_id: str, detail: str, *, cause: BaseException | None = None) -> None:
        self.detail = detail
        super().__init__(source_id, f"malformed data: {detail}", cause=cause)


class CliError(FaultNavError):
    """Command-line input did not resolve against the loaded tree."""


__all__ = ["FaultNavError", "FetchError", "ParseError", "CliError"]
