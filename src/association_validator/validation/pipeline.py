"""
Validation Pipeline: Three-stage association validation orchestrator.

Coordinates the validation stages in fixed order:
- Stage 1: Duplicate detection (ALREADY_EXISTS)
- Stage 2: Company role limits (WOULD_EXCEED_LIMIT)
- Stage 3: Contact role limits (WOULD_EXCEED_LIMIT)

Each stage only sees the candidates accepted by the previous one, while the
existing baseline stays the same for all three. Stage order therefore decides
which reason is reported when an association breaks several rules.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..config import Settings
from ..models.associations import Dataset, InvalidAssociation, ValidationResult
from ..monitoring.metrics import (
    associations_validated_total,
    invalid_associations_total,
)
from .stage1_duplicates import validate_duplicate_contacts
from .stage2_company_role_limits import (
    DEFAULT_MAX_ROLE_PER_COMPANY,
    validate_company_role_limits,
)
from .stage3_contact_role_limits import (
    DEFAULT_MAX_ROLE_PER_CONTACT,
    validate_contact_role_limits,
)

logger = logging.getLogger(__name__)


def validate_dataset(
    dataset: Dataset,
    max_role_per_company: int = DEFAULT_MAX_ROLE_PER_COMPANY,
    max_role_per_contact: int = DEFAULT_MAX_ROLE_PER_CONTACT,
) -> ValidationResult:
    """
    Validate a dataset against every rule.

    Pure and total for schema-valid input: the dataset is not modified and
    running it twice gives the same result.

    Args:
        dataset: Existing baseline and candidate batch
        max_role_per_company: Limit for Stage 2
        max_role_per_contact: Limit for Stage 3

    Returns:
        Valid associations surviving all stages, and invalid associations
        from Stage 1, 2 and 3 in that order
    """
    duplicates = validate_duplicate_contacts(dataset)

    company_limits = validate_company_role_limits(
        dataset.with_new_associations(duplicates.valid_associations),
        max_role_per_company,
    )

    contact_limits = validate_contact_role_limits(
        dataset.with_new_associations(company_limits.valid_associations),
        max_role_per_contact,
    )

    return ValidationResult(
        valid_associations=contact_limits.valid_associations,
        invalid_associations=[
            *duplicates.invalid_associations,
            *company_limits.invalid_associations,
            *contact_limits.invalid_associations,
        ],
    )


@dataclass(frozen=True)
class StageOutcome:
    """Per-stage counts recorded by ValidationPipeline."""

    stage: str
    candidates: int
    valid: int
    invalid: int


class ValidationPipeline:
    """
    Settings-driven validation pipeline.

    Runs the same stages as validate_dataset with limits taken from Settings,
    and additionally logs per-stage counts and updates Prometheus counters.
    """

    def __init__(self, settings: Settings):
        """
        Initialize validation pipeline.

        Args:
            settings: Application settings with validation limits
        """
        self.settings = settings
        self.max_role_per_company = settings.MAX_ROLE_PER_COMPANY
        self.max_role_per_contact = settings.MAX_ROLE_PER_CONTACT

        self.stages: list[tuple[str, Callable[[Dataset], ValidationResult]]] = [
            ("duplicates", validate_duplicate_contacts),
            (
                "company_role_limit",
                lambda ds: validate_company_role_limits(ds, self.max_role_per_company),
            ),
            (
                "contact_role_limit",
                lambda ds: validate_contact_role_limits(ds, self.max_role_per_contact),
            ),
        ]

        logger.info(
            f"ValidationPipeline initialized with {len(self.stages)} stages "
            f"(max_role_per_company: {self.max_role_per_company}, "
            f"max_role_per_contact: {self.max_role_per_contact})"
        )

    def validate(self, dataset: Dataset) -> ValidationResult:
        """
        Run all stages on a dataset.

        Args:
            dataset: Existing baseline and candidate batch

        Returns:
            Same result as validate_dataset with the configured limits
        """
        logger.info(
            f"Starting validation pipeline for {len(dataset.new_associations)} new "
            f"associations against {len(dataset.existing_associations)} existing"
        )

        candidates = dataset
        invalid: list[InvalidAssociation] = []
        outcomes: list[StageOutcome] = []

        for stage_name, stage in self.stages:
            result = stage(candidates)
            invalid.extend(result.invalid_associations)
            outcomes.append(
                StageOutcome(
                    stage=stage_name,
                    candidates=len(candidates.new_associations),
                    valid=len(result.valid_associations),
                    invalid=len(result.invalid_associations),
                )
            )
            self._record_metrics(stage_name, result)
            candidates = dataset.with_new_associations(result.valid_associations)

        final = ValidationResult(
            valid_associations=candidates.new_associations,
            invalid_associations=invalid,
        )

        for outcome in outcomes:
            logger.debug(
                f"Stage {outcome.stage}: {outcome.candidates} in, "
                f"{outcome.valid} valid, {outcome.invalid} invalid"
            )

        if final.invalid_associations:
            logger.warning(
                f"Validation completed with {len(final.invalid_associations)} rejected "
                f"and {len(final.valid_associations)} accepted association(s)"
            )
        else:
            logger.info(
                f"Validation completed: all {len(final.valid_associations)} association(s) accepted"
            )

        return final

    def _record_metrics(self, stage_name: str, result: ValidationResult) -> None:
        if not self.settings.PROMETHEUS_ENABLED:
            return

        associations_validated_total.labels(stage=stage_name, outcome="valid").inc(
            len(result.valid_associations)
        )
        associations_validated_total.labels(stage=stage_name, outcome="invalid").inc(
            len(result.invalid_associations)
        )
        for association in result.invalid_associations:
            invalid_associations_total.labels(
                stage=stage_name, failure_reason=association.failure_reason.value
            ).inc()
