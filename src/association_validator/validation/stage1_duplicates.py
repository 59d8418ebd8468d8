"""
Stage 1: Duplicate Detection.

Reject proposed associations that:
- already exist in the baseline (same company, contact and role)
- appear more than once in the same batch (every copy is rejected)

Both cases are reported as ALREADY_EXISTS.
"""

import structlog

from ..models.associations import (
    Association,
    Dataset,
    InvalidAssociation,
    ValidationResult,
)
from ..models.enums import FailureReason
from .grouping import duplicate_key, group_by

logger = structlog.get_logger(__name__)


def validate_duplicate_contacts(dataset: Dataset) -> ValidationResult:
    """
    Partition new associations into unique and duplicated ones.

    Output order: baseline duplicates in input order, then the remaining
    candidates grouped by key in first-seen order.

    Args:
        dataset: Existing baseline and candidate batch

    Returns:
        ValidationResult with every candidate in exactly one of the two lists
    """
    existing_keys = {duplicate_key(a) for a in dataset.existing_associations}

    invalid: list[InvalidAssociation] = []
    remaining: list[Association] = []

    for association in dataset.new_associations:
        if duplicate_key(association) in existing_keys:
            invalid.append(
                InvalidAssociation.from_association(
                    association, FailureReason.ALREADY_EXISTS
                )
            )
        else:
            remaining.append(association)

    baseline_duplicates = len(invalid)
    valid: list[Association] = []

    # Duplicates within the batch are rejected together; none of the copies
    # is preferred over the others.
    for group in group_by(remaining, duplicate_key).values():
        if len(group) > 1:
            invalid.extend(
                InvalidAssociation.from_association(
                    association, FailureReason.ALREADY_EXISTS
                )
                for association in group
            )
        else:
            valid.extend(group)

    logger.debug(
        "Stage 1: duplicate detection complete",
        candidates=len(dataset.new_associations),
        baseline_duplicates=baseline_duplicates,
        batch_duplicates=len(invalid) - baseline_duplicates,
        valid=len(valid),
    )

    return ValidationResult(valid_associations=valid, invalid_associations=invalid)
