"""
Failures surfaced to the command line.

Every lookup either produces its full block of output or raises one of these.
"""

from typing import Optional


class PokeLookupError(Exception):
    """Base for all user-facing lookup failures."""

    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(PokeLookupError):
    """The primary subject of a lookup does not exist in the API."""

    exit_code = 2

    def __init__(self, subject: str, kind: str = "pokemon", suggestion: Optional[str] = None):
        super().__init__(f"invalid {kind}: {subject}")
        self.subject = subject
        self.kind = kind
        # Command (without the program name) that lists valid spellings
        self.suggestion = suggestion


class UpstreamFetchFailed(PokeLookupError):
    """A fetch failed after the primary subject resolved (or the transport broke)."""

    def __init__(self, context: str):
        super().__init__(f"API error: could not retrieve {context}")
        self.context = context


class MalformedResponse(PokeLookupError):
    """The API answered with a payload that does not match the expected schema."""

    def __init__(self, context: str):
        super().__init__(f"API error: malformed response for {context}")
        self.context = context
