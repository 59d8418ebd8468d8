"""
Association Validator.

Classifies a batch of proposed company/contact/role associations against the
existing ones. Three rules run in fixed order:
- Duplicates (already existing, or repeated within the batch)
- Per-company role limit
- Per-contact role limit within a company

Architecture: pure validation pipeline + async API client + CLI
"""

__version__ = "0.1.0"
