"""
Association data models.

Wire payloads use camelCase keys (companyId, contactId, failureReason, ...).
Models accept both the wire aliases and the Python field names, and are
serialised back to camelCase with ``by_alias=True``.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from association_validator.models.enums import FailureReason


class Association(BaseModel):
    """
    Link between a company, a contact and a role.

    Immutable value with structural equality: two associations with the same
    fields are the same association, and instances are hashable so they can
    be used directly in sets and as mapping keys.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    company_id: int = Field(..., alias="companyId", strict=True)
    contact_id: int = Field(..., alias="contactId", strict=True)
    role: str = Field(..., strict=True)


class InvalidAssociation(Association):
    """An association rejected by one of the validation stages."""

    failure_reason: FailureReason = Field(..., alias="failureReason")

    @classmethod
    def from_association(
        cls, association: Association, reason: FailureReason
    ) -> "InvalidAssociation":
        """Tag an association with the reason it was rejected."""
        return cls(
            company_id=association.company_id,
            contact_id=association.contact_id,
            role=association.role,
            failure_reason=reason,
        )

    @property
    def association(self) -> Association:
        """The rejected association without its failure reason."""
        return Association(
            company_id=self.company_id,
            contact_id=self.contact_id,
            role=self.role,
        )


class Dataset(BaseModel):
    """
    Snapshot consumed by the validation pipeline.

    existing_associations is the baseline for the whole run and is never
    modified; new_associations is the candidate batch, which each stage
    narrows before handing it to the next one.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    existing_associations: list[Association] = Field(..., alias="existingAssociations")
    new_associations: list[Association] = Field(..., alias="newAssociations")

    def with_new_associations(self, associations: Iterable[Association]) -> "Dataset":
        """Return a dataset with the same baseline and a different candidate batch."""
        return Dataset(
            existing_associations=self.existing_associations,
            new_associations=list(associations),
        )


class ValidationResult(BaseModel):
    """Partition of a candidate batch into accepted and rejected associations."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    valid_associations: list[Association] = Field(
        default_factory=list, alias="validAssociations"
    )
    invalid_associations: list[InvalidAssociation] = Field(
        default_factory=list, alias="invalidAssociations"
    )

    @property
    def total(self) -> int:
        """Number of associations classified."""
        return len(self.valid_associations) + len(self.invalid_associations)

    def to_payload(self) -> dict:
        """camelCase body accepted by the results endpoint."""
        return self.model_dump(by_alias=True, mode="json")
