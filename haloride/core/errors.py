"""Error types raised along the lead submission pipeline."""

from typing import Optional


class LeadValidationError(Exception):
    """Raised when lead input fails the field rules.

    ``errors`` maps the client-facing field key (``mobileNumber``) to a
    human-readable message suitable for inline rendering.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {message}" for field, message in self.errors.items()))


class LeadStoreError(Exception):
    """Raised by a lead store when the backend or the transport fails."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        hint: Optional[str] = None,
        code: Optional[str] = None,
    ):
        self.message = message
        self.details = details
        self.hint = hint
        self.code = code
        super().__init__(message)


class LeadSubmissionError(Exception):
    """Terminal failure of one submission attempt; callers must not retry."""

    def __init__(self, message: str, hint: Optional[str] = None):
        self.hint = hint
        super().__init__(message)
