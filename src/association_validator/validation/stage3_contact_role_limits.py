"""
Stage 3: Contact Role Limits.

A contact may hold at most ``max_role_per_contact`` roles within the same
company, counting the baseline plus the candidates accepted by this stage.
"""

import structlog

from ..models.associations import Dataset, ValidationResult
from .grouping import contact_company_key, partition_by_limit

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ROLE_PER_CONTACT = 2


def validate_contact_role_limits(
    dataset: Dataset,
    max_role_per_contact: int = DEFAULT_MAX_ROLE_PER_CONTACT,
) -> ValidationResult:
    """
    Reject (contact, company) groups that would exceed the contact limit.

    Args:
        dataset: Existing baseline and candidate batch
        max_role_per_contact: Maximum associations per (contact, company)

    Returns:
        ValidationResult; rejected candidates carry WOULD_EXCEED_LIMIT

    Raises:
        ValueError: If max_role_per_contact is negative
    """
    result = partition_by_limit(
        dataset.existing_associations,
        dataset.new_associations,
        key=contact_company_key,
        limit=max_role_per_contact,
    )
    logger.debug(
        "Stage 3: contact role limits checked",
        limit=max_role_per_contact,
        valid=len(result.valid_associations),
        invalid=len(result.invalid_associations),
    )
    return result
