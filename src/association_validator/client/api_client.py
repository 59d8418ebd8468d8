"""
Remote API client for fetching datasets and submitting validation results.

Communicates with the associations API using httpx AsyncClient. Supports:
- Test and live endpoint families (ApiMode)
- Connection pooling via a persistent AsyncClient
- Retry with exponential backoff on network errors, timeouts and 5xx
- Payload validation into Dataset / ValidationResult models
"""

import asyncio
from typing import Any, Optional, TypeVar

import httpx
import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from association_validator.client.exceptions import (
    SchemaError,
    TransportConnectionError,
    TransportError,
    TransportStatusError,
    TransportTimeoutError,
)
from association_validator.config import Settings
from association_validator.models.associations import Dataset, ValidationResult
from association_validator.models.enums import ApiMode
from association_validator.monitoring.metrics import transport_requests_total

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class AssociationsClient:
    """
    Async client for the associations API.

    API Endpoints (all take a ``userKey`` query parameter):
    - GET  /dataset, /test-dataset: Existing and new associations
    - POST /result, /test-result: Submit a ValidationResult
    - GET  /test-dataset-answer: Expected ValidationResult for the test dataset

    Any status other than 200 is a failure.
    """

    DATASET_PATHS = {ApiMode.TEST: "/test-dataset", ApiMode.LIVE: "/dataset"}
    RESULT_PATHS = {ApiMode.TEST: "/test-result", ApiMode.LIVE: "/result"}
    ANSWER_PATH = "/test-dataset-answer"

    def __init__(
        self,
        base_url: str,
        user_key: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_base: float = 2.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        record_metrics: bool = True,
    ):
        """
        Initialize API client.

        Args:
            base_url: API root, e.g. https://host/candidateTest/v3/problem
            user_key: Value sent as the userKey query parameter
            timeout: Request timeout in seconds
            max_retries: Attempts per call for retryable failures (at least 1)
            backoff_base: Sleep ``backoff_base ** attempt`` seconds between attempts
            transport: Optional httpx transport (tests use httpx.MockTransport)
            record_metrics: Update Prometheus counters for each response
        """
        self.base_url = base_url.rstrip("/")
        self.user_key = user_key
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.backoff_base = backoff_base
        self.record_metrics = record_metrics

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "Associations API client initialized",
            base_url=self.base_url,
            timeout=timeout,
            max_retries=self.max_retries,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AssociationsClient":
        """Build a client from application settings."""
        return cls(
            base_url=settings.API_BASE_URL,
            user_key=settings.API_USER_KEY,
            timeout=settings.API_TIMEOUT,
            max_retries=settings.API_MAX_RETRIES,
            backoff_base=settings.API_RETRY_BACKOFF_BASE,
            transport=transport,
            record_metrics=settings.PROMETHEUS_ENABLED,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                params={"userKey": self.user_key},
                transport=self._transport,
                follow_redirects=True,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "AssociationsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def fetch_dataset(self, mode: ApiMode = ApiMode.LIVE) -> Dataset:
        """
        Fetch the dataset to validate.

        Raises:
            TransportError: If the call does not return 200
            SchemaError: If the body is not a valid Dataset
        """
        path = self.DATASET_PATHS[mode]
        logger.info("Fetching dataset", path=path, mode=mode.value)

        response = await self._request("fetch_dataset", "GET", path)
        dataset = self._parse(response, Dataset, "fetch_dataset")

        logger.info(
            "Fetched dataset",
            path=path,
            existing=len(dataset.existing_associations),
            new=len(dataset.new_associations),
        )
        return dataset

    async def submit_results(
        self, result: ValidationResult, mode: ApiMode = ApiMode.LIVE
    ) -> None:
        """
        Submit a validation result.

        Raises:
            TransportError: If the call does not return 200
        """
        path = self.RESULT_PATHS[mode]
        logger.info(
            "Submitting validation results",
            path=path,
            mode=mode.value,
            valid=len(result.valid_associations),
            invalid=len(result.invalid_associations),
        )

        await self._request("submit_results", "POST", path, json=result.to_payload())

        logger.info("Submitted validation results", path=path)

    async def fetch_expected_results(self) -> ValidationResult:
        """
        Fetch the expected result for the test dataset.

        Only available for ApiMode.TEST.

        Raises:
            TransportError: If the call does not return 200
            SchemaError: If the body is not a valid ValidationResult
        """
        logger.info("Fetching expected results", path=self.ANSWER_PATH)
        response = await self._request("fetch_expected_results", "GET", self.ANSWER_PATH)
        return self._parse(response, ValidationResult, "fetch_expected_results")

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send a request, retrying network errors, timeouts and 5xx."""
        for attempt in range(1, self.max_retries + 1):
            try:
                client = await self._get_client()
                response = await client.request(method, path, json=json)
            except httpx.TimeoutException as e:
                self._count(operation, "timeout")
                logger.warning(
                    "Request timeout",
                    operation=operation,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                    error=str(e),
                )
                error: TransportError = TransportTimeoutError(
                    f"{operation} timed out after {self.timeout}s",
                    details={"attempt": attempt, "timeout": self.timeout},
                )
            except httpx.TransportError as e:
                self._count(operation, "network_error")
                logger.warning(
                    "Network error",
                    operation=operation,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                error = TransportConnectionError(
                    f"{operation} failed: {e}",
                    details={"attempt": attempt, "error_type": type(e).__name__},
                )
            else:
                self._count(operation, str(response.status_code))

                if response.status_code == 200:
                    return response

                logger.error(
                    "Unexpected response status",
                    operation=operation,
                    status_code=response.status_code,
                    reason=response.reason_phrase,
                    attempt=attempt,
                )
                error = TransportStatusError(
                    f"{operation} failed: {response.status_code} {response.reason_phrase}",
                    status_code=response.status_code,
                    body=response.text,
                )
                if response.status_code < 500:
                    # Client error (4xx, 3xx) - not retryable
                    raise error

            if attempt == self.max_retries:
                raise error

            backoff = self.backoff_base ** attempt
            logger.info(f"Retrying {operation} after {backoff}s backoff...")
            await asyncio.sleep(backoff)

        # Only reachable if max_retries < 1, which __init__ prevents
        raise TransportError(
            f"{operation} was never attempted",
            details={"max_retries": self.max_retries},
        )

    def _parse(self, response: httpx.Response, model: type[ModelT], operation: str) -> ModelT:
        """Validate a response body into a model."""
        try:
            payload = response.json()
        except ValueError as e:
            logger.error("Response body is not JSON", operation=operation, error=str(e))
            raise SchemaError(
                f"{operation} returned a non-JSON body",
                validation_errors=[str(e)],
            ) from e

        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            error_messages = [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            logger.error(
                "Response body does not match schema",
                operation=operation,
                model=model.__name__,
                error_count=len(error_messages),
            )
            raise SchemaError(
                f"{operation} returned an invalid {model.__name__}: "
                f"{len(error_messages)} error(s)",
                validation_errors=error_messages,
            ) from e

    def _count(self, operation: str, status: str) -> None:
        if self.record_metrics:
            transport_requests_total.labels(operation=operation, status=status).inc()
