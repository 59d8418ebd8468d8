"""
Grouping helpers shared by the validation stages.

Keys are structural tuples built from association fields. Groups keep
first-seen key order and, within a group, input order.
"""

from collections import Counter
from collections.abc import Callable, Hashable, Iterable

from ..models.associations import Association, InvalidAssociation, ValidationResult
from ..models.enums import FailureReason

KeyFunc = Callable[[Association], Hashable]


def duplicate_key(association: Association) -> tuple[int, int, str]:
    """Full identity of an association."""
    return (association.company_id, association.contact_id, association.role)


def company_role_key(association: Association) -> tuple[int, str]:
    """Key counted against the per-company role limit."""
    return (association.company_id, association.role)


def contact_company_key(association: Association) -> tuple[int, int]:
    """Key counted against the per-contact limit within one company."""
    return (association.contact_id, association.company_id)


def group_by(
    associations: Iterable[Association], key: KeyFunc
) -> dict[Hashable, list[Association]]:
    """Group associations by key, preserving first-seen key order."""
    groups: dict[Hashable, list[Association]] = {}
    for association in associations:
        groups.setdefault(key(association), []).append(association)
    return groups


def count_by(associations: Iterable[Association], key: KeyFunc) -> Counter:
    """Count associations per key."""
    return Counter(key(association) for association in associations)


def partition_by_limit(
    existing: Iterable[Association],
    candidates: Iterable[Association],
    key: KeyFunc,
    limit: int,
) -> ValidationResult:
    """
    Accept or reject whole candidate groups against a per-key limit.

    A group is rejected with WOULD_EXCEED_LIMIT when its size plus the number
    of existing associations under the same key is above the limit. There is
    no partial admission: a group passes or fails as a unit.

    Args:
        existing: Baseline associations (only counted, never returned)
        candidates: Associations to classify
        key: Function building the grouping key
        limit: Maximum associations allowed per key once candidates are added

    Raises:
        ValueError: If limit is negative
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    existing_counts = count_by(existing, key)
    valid: list[Association] = []
    invalid: list[InvalidAssociation] = []

    for group_key, group in group_by(candidates, key).items():
        existing_count = existing_counts.get(group_key, 0)
        # Second condition is implied by the first while counts are non-negative
        if len(group) + existing_count > limit or len(group) > limit:
            invalid.extend(
                InvalidAssociation.from_association(
                    association, FailureReason.WOULD_EXCEED_LIMIT
                )
                for association in group
            )
        else:
            valid.extend(group)

    return ValidationResult(valid_associations=valid, invalid_associations=invalid)
