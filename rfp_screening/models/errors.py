"""Errors surfaced to callers of the screening core."""


class ScreeningInputError(ValueError):
    """Input rejected before any scoring (empty RFP text, unidentified profile)."""
