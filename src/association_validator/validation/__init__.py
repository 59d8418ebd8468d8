"""
Three-stage association validation pipeline.

- pipeline.py: validate_dataset and the settings-driven ValidationPipeline
- stage1_duplicates.py: Baseline and in-batch duplicates (ALREADY_EXISTS)
- stage2_company_role_limits.py: Per (company, role) limit (WOULD_EXCEED_LIMIT)
- stage3_contact_role_limits.py: Per (contact, company) limit (WOULD_EXCEED_LIMIT)
- comparison.py: Order-insensitive comparison against an expected answer
"""

from .comparison import ResultComparison, compare_results
from .pipeline import StageOutcome, ValidationPipeline, validate_dataset
from .stage1_duplicates import validate_duplicate_contacts
from .stage2_company_role_limits import validate_company_role_limits
from .stage3_contact_role_limits import validate_contact_role_limits

__all__ = [
    # Main pipeline
    "ValidationPipeline",
    "StageOutcome",
    "validate_dataset",
    # Stages
    "validate_duplicate_contacts",
    "validate_company_role_limits",
    "validate_contact_role_limits",
    # Answer comparison
    "ResultComparison",
    "compare_results",
]
