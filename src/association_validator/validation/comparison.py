"""
Comparison of a computed ValidationResult against an expected answer.

Used with the test endpoints, which publish the expected result for the
test dataset. Ordering is ignored; multiplicity is not.
"""

from collections import Counter
from dataclasses import dataclass, field

import structlog

from ..models.associations import Association, InvalidAssociation, ValidationResult

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResultComparison:
    """Differences between an actual and an expected result."""

    missing_valid: list[Association] = field(default_factory=list)
    unexpected_valid: list[Association] = field(default_factory=list)
    missing_invalid: list[InvalidAssociation] = field(default_factory=list)
    unexpected_invalid: list[InvalidAssociation] = field(default_factory=list)

    @property
    def matches(self) -> bool:
        return not (
            self.missing_valid
            or self.unexpected_valid
            or self.missing_invalid
            or self.unexpected_invalid
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output (camelCase association keys)."""
        return {
            "matches": self.matches,
            "missingValid": [a.model_dump(by_alias=True) for a in self.missing_valid],
            "unexpectedValid": [a.model_dump(by_alias=True) for a in self.unexpected_valid],
            "missingInvalid": [
                a.model_dump(by_alias=True, mode="json") for a in self.missing_invalid
            ],
            "unexpectedInvalid": [
                a.model_dump(by_alias=True, mode="json") for a in self.unexpected_invalid
            ],
        }


def _difference(left: list, right: list) -> list:
    return list((Counter(left) - Counter(right)).elements())


def compare_results(
    actual: ValidationResult, expected: ValidationResult
) -> ResultComparison:
    """
    Compare two results as multisets.

    Args:
        actual: Result computed locally
        expected: Reference result

    Returns:
        ResultComparison listing what is missing from and unexpected in actual
    """
    comparison = ResultComparison(
        missing_valid=_difference(expected.valid_associations, actual.valid_associations),
        unexpected_valid=_difference(actual.valid_associations, expected.valid_associations),
        missing_invalid=_difference(
            expected.invalid_associations, actual.invalid_associations
        ),
        unexpected_invalid=_difference(
            actual.invalid_associations, expected.invalid_associations
        ),
    )

    if comparison.matches:
        logger.info("Result matches expected answer", total=actual.total)
    else:
        logger.warning(
            "Result differs from expected answer",
            missing_valid=len(comparison.missing_valid),
            unexpected_valid=len(comparison.unexpected_valid),
            missing_invalid=len(comparison.missing_invalid),
            unexpected_invalid=len(comparison.unexpected_invalid),
        )

    return comparison
