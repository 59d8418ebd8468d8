"""
Pydantic data models for the Association Validator.

Includes:
- Association models (Association, InvalidAssociation, Dataset, ValidationResult)
- Enums (FailureReason, ApiMode)
"""

from association_validator.models.enums import ApiMode, FailureReason
from association_validator.models.associations import (
    Association,
    Dataset,
    InvalidAssociation,
    ValidationResult,
)

__all__ = [
    # Enums
    "ApiMode",
    "FailureReason",
    # Association models
    "Association",
    "InvalidAssociation",
    "Dataset",
    "ValidationResult",
]
