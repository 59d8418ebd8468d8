"""
Remote API client for the associations service.

Fetches datasets, submits results and retrieves the expected answer for the
test dataset. All failures surface as TransportError subclasses or SchemaError.
"""

from association_validator.client.api_client import AssociationsClient
from association_validator.client.exceptions import (
    SchemaError,
    TransportConnectionError,
    TransportError,
    TransportStatusError,
    TransportTimeoutError,
)

__all__ = [
    "AssociationsClient",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "TransportStatusError",
    "SchemaError",
]
