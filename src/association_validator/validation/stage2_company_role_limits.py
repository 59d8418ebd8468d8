"""
Stage 2: Company Role Limits.

A company may hold at most ``max_role_per_company`` associations with the same
role, counting the baseline plus the candidates accepted by this stage.
"""

import structlog

from ..models.associations import Dataset, ValidationResult
from .grouping import company_role_key, partition_by_limit

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ROLE_PER_COMPANY = 5


def validate_company_role_limits(
    dataset: Dataset,
    max_role_per_company: int = DEFAULT_MAX_ROLE_PER_COMPANY,
) -> ValidationResult:
    """
    Reject (company, role) groups that would exceed the company limit.

    Args:
        dataset: Existing baseline and candidate batch
        max_role_per_company: Maximum associations per (company, role);
            0 rejects every candidate

    Returns:
        ValidationResult; rejected candidates carry WOULD_EXCEED_LIMIT

    Raises:
        ValueError: If max_role_per_company is negative
    """
    result = partition_by_limit(
        dataset.existing_associations,
        dataset.new_associations,
        key=company_role_key,
        limit=max_role_per_company,
    )
    logger.debug(
        "Stage 2: company role limits checked",
        limit=max_role_per_company,
        valid=len(result.valid_associations),
        invalid=len(result.invalid_associations),
    )
    return result
