"""
Unit tests for Stage 3: Contact Role Limits.
"""

import pytest

from association_validator.models import Association, FailureReason
from association_validator.validation.stage3_contact_role_limits import (
    DEFAULT_MAX_ROLE_PER_CONTACT,
    validate_contact_role_limits,
)


def assoc(company_id: int, contact_id: int, role: str) -> Association:
    """Helper to create an Association for testing."""
    return Association(company_id=company_id, contact_id=contact_id, role=role)


class TestStage3ContactRoleLimits:
    """Test suite for Stage 3 contact role limits."""

    def test_default_limit(self):
        assert DEFAULT_MAX_ROLE_PER_CONTACT == 2

    def test_group_exceeding_limit_is_rejected(self, make_dataset):
        """Test 1 existing + 2 new = 3 > 2 rejects both new roles."""
        dataset = make_dataset(
            existing=[(1, 7, "CEO")],
            new=[(1, 7, "CTO"), (1, 7, "CFO")],
        )

        result = validate_contact_role_limits(dataset)

        assert result.valid_associations == []
        assert {a.failure_reason for a in result.invalid_associations} == {
            FailureReason.WOULD_EXCEED_LIMIT
        }
        assert len(result.invalid_associations) == 2

    def test_group_reaching_limit_is_accepted(self, make_dataset):
        dataset = make_dataset(existing=[(1, 7, "CEO")], new=[(1, 7, "CTO")])

        result = validate_contact_role_limits(dataset)

        assert result.valid_associations == [assoc(1, 7, "CTO")]
        assert result.invalid_associations == []

    def test_contact_at_limit_cannot_take_more(self, make_dataset):
        dataset = make_dataset(
            existing=[(1, 7, "CEO"), (1, 7, "CTO")],
            new=[(1, 7, "CFO")],
        )

        result = validate_contact_role_limits(dataset)

        assert [a.association for a in result.invalid_associations] == [assoc(1, 7, "CFO")]

    def test_limit_is_per_company(self, make_dataset):
        """Test that roles of the same contact in other companies do not count."""
        dataset = make_dataset(
            existing=[(1, 7, "CEO"), (1, 7, "CTO")],
            new=[(2, 7, "CEO"), (2, 7, "CTO")],
        )

        result = validate_contact_role_limits(dataset)

        assert result.valid_associations == [assoc(2, 7, "CEO"), assoc(2, 7, "CTO")]

    def test_custom_limit(self, make_dataset):
        dataset = make_dataset(new=[(1, 7, "A"), (1, 7, "B"), (1, 7, "C")])

        assert validate_contact_role_limits(dataset, max_role_per_contact=3).invalid_associations == []
        assert len(validate_contact_role_limits(dataset, max_role_per_contact=2).invalid_associations) == 3

    def test_negative_limit_raises(self, make_dataset):
        with pytest.raises(ValueError):
            validate_contact_role_limits(make_dataset(), max_role_per_contact=-3)
