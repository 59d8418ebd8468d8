"""
Enumerations for Association Validator data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class FailureReason(str, Enum):
    """
    Reason attached to every rejected association.

    ALREADY_EXISTS covers both associations present in the existing baseline
    and associations duplicated within the same batch.
    """

    ALREADY_EXISTS = "ALREADY_EXISTS"
    WOULD_EXCEED_LIMIT = "WOULD_EXCEED_LIMIT"


class ApiMode(str, Enum):
    """Remote endpoint family used by the transport client."""

    TEST = "test"
    LIVE = "live"

    @classmethod
    def from_flag(cls, test: bool) -> "ApiMode":
        """Map the CLI --test flag to a mode."""
        return cls.TEST if test else cls.LIVE
