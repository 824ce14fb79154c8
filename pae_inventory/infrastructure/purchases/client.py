"""
Purchases backend HTTP client.

Relays inventory-movement reads and writes to the purchases backend,
which owns movement persistence. Transport failures are retried with
backoff; status codes are classified into domain errors.
"""

import asyncio
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pae_inventory.config import get_logger, get_settings
from pae_inventory.core.entities import (
    InventoryAdjustment,
    InventoryAdjustmentResult,
    InventoryConsumption,
    InventoryConsumptionResult,
    InventoryMovement,
    InventoryReceipt,
    InventoryReceiptResult,
    MovementType,
)
from pae_inventory.core.exceptions import (
    ConfigurationError,
    PurchasesAPIError,
    PurchasesAPIUnavailableError,
    PurchasesAuthError,
)
from pae_inventory.core.interfaces import IInventoryMovementGateway

logger = get_logger(__name__)

_MOVEMENTS_PATH = "/inventory-movements"
_AUTH_STATUS_CODES = {401, 403}
_HEALTH_TIMEOUT = 5.0


class PurchasesAPIClient(IInventoryMovementGateway):
    """Async client for the purchases backend inventory-movement endpoints.

    Features:
    - Bearer token injected at construction
    - Retry with exponential backoff on timeouts, connection errors and 5xx
    - 404 and malformed list bodies read as an empty log
    - Invalid movement records skipped, not fatal
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_delays: list[float] | None = None,
        prefix: str | None = None,
    ):
        settings = get_settings().purchases_api
        self._base_url = (base_url or settings.base_url).rstrip("/")
        if not self._base_url:
            raise ConfigurationError(
                "Purchases API base URL is not configured (PURCHASES_API_BASE_URL)"
            )
        self._prefix = settings.prefix if prefix is None else prefix
        self._token = token if token is not None else settings.token
        self._timeout = timeout or settings.timeout
        self._max_retries = max(max_retries or settings.max_retries, 1)
        self._backoff_delays = (
            list(backoff_delays) if backoff_delays is not None else settings.backoff_delays
        ) or [0.0]

    @property
    def base_url(self) -> str:
        return self._base_url

    def _url(self, path: str) -> str:
        return f"{self._base_url}{self._prefix}{_MOVEMENTS_PATH}{path}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request with retry + exponential backoff.

        Returns the first response below 500. Raises
        PurchasesAPIUnavailableError once every attempt has failed.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        reason = "no attempt made"

        for attempt in range(1, self._max_retries + 1):
            try:
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    headers=self._headers(),
                ) as client:
                    response = await client.request(
                        method, url, params=query or None, json=payload
                    )

                if response.status_code < 500:
                    logger.debug(
                        "purchases_api_response",
                        operation=operation,
                        status_code=response.status_code,
                        attempt=attempt,
                    )
                    return response

                reason = f"HTTP {response.status_code}"
                logger.warning(
                    "purchases_api_server_error",
                    operation=operation,
                    status_code=response.status_code,
                    attempt=attempt,
                )

            except httpx.TimeoutException:
                reason = f"Timeout after {self._timeout}s"
                logger.warning(
                    "purchases_api_timeout",
                    operation=operation,
                    attempt=attempt,
                    timeout=self._timeout,
                )
            except httpx.RequestError as exc:
                reason = str(exc) or exc.__class__.__name__
                logger.warning(
                    "purchases_api_network_error",
                    operation=operation,
                    attempt=attempt,
                    error=reason,
                )

            # Wait before retrying (skip wait after last attempt)
            if attempt < self._max_retries:
                delay_index = min(attempt - 1, len(self._backoff_delays) - 1)
                delay = self._backoff_delays[delay_index]
                logger.info("purchases_api_retry_wait", delay=delay, attempt=attempt)
                await asyncio.sleep(delay)

        logger.error(
            "purchases_api_retries_exhausted",
            operation=operation,
            max_retries=self._max_retries,
            reason=reason,
        )
        raise PurchasesAPIUnavailableError(operation, reason, attempts=self._max_retries)

    @staticmethod
    def _raise_for_status(operation: str, response: httpx.Response) -> None:
        status = response.status_code
        if status in _AUTH_STATUS_CODES:
            raise PurchasesAuthError(operation, status)
        if not response.is_success:
            raise PurchasesAPIError(
                operation,
                f"HTTP {status}: {response.text[:200]}",
                status_code=status,
            )

    async def _get_movement_list(
        self, operation: str, url: str, params: dict[str, Any]
    ) -> list[InventoryMovement]:
        response = await self._request(operation, "GET", url, params=params)
        if response.status_code == 404:
            logger.info("purchases_api_not_found", operation=operation)
            return []
        self._raise_for_status(operation, response)

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, list):
            logger.warning(
                "purchases_api_unexpected_body",
                operation=operation,
                body_type=type(body).__name__,
            )
            return []

        movements: list[InventoryMovement] = []
        for index, record in enumerate(body):
            try:
                movements.append(InventoryMovement.model_validate(record))
            except PydanticValidationError as exc:
                logger.warning(
                    "purchases_api_invalid_movement",
                    operation=operation,
                    index=index,
                    errors=exc.error_count(),
                )
        return movements

    async def _post_command(
        self,
        operation: str,
        path: str,
        command: BaseModel,
        result_type: type[BaseModel],
    ) -> Any:
        payload = command.model_dump(mode="json", exclude_none=True)
        response = await self._request(operation, "POST", self._url(path), payload=payload)
        self._raise_for_status(operation, response)

        try:
            return result_type.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise PurchasesAPIError(
                operation,
                f"Unexpected response body: {exc}",
                status_code=response.status_code,
            ) from exc

    async def list_movements(
        self,
        product_id: str,
        institution_id: int | None = None,
        movement_type: MovementType | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[InventoryMovement]:
        """Fetch the movement log of a product."""
        params = {
            "institution_id": institution_id,
            "movement_type": movement_type.value if movement_type else None,
            "limit": limit,
            "offset": offset,
        }
        movements = await self._get_movement_list(
            "list_movements",
            self._url(f"/product/{quote(product_id, safe='')}"),
            params,
        )
        logger.info(
            "movements_fetched",
            product_id=product_id,
            institution_id=institution_id,
            count=len(movements),
        )
        return movements

    async def list_consumption_history(
        self,
        product_id: str,
        institution_id: int | None = None,
        storage_location: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[InventoryMovement]:
        """Fetch the consumption movements of a product."""
        params = {
            "institution_id": institution_id,
            "storage_location": storage_location,
            "limit": limit,
            "offset": offset,
        }
        return await self._get_movement_list(
            "list_consumption_history",
            self._url(f"/consumption-history/{quote(product_id, safe='')}"),
            params,
        )

    async def receive(self, receipt: InventoryReceipt) -> InventoryReceiptResult:
        return await self._post_command(
            "receive", "/receive", receipt, InventoryReceiptResult
        )

    async def consume(
        self, consumption: InventoryConsumption
    ) -> InventoryConsumptionResult:
        return await self._post_command(
            "consume", "/consume", consumption, InventoryConsumptionResult
        )

    async def adjust(self, adjustment: InventoryAdjustment) -> InventoryAdjustmentResult:
        return await self._post_command(
            "adjust", "/adjust", adjustment, InventoryAdjustmentResult
        )

    async def check_health(self) -> bool:
        """Single unretried check of the backend's /health endpoint."""
        try:
            async with httpx.AsyncClient(
                timeout=_HEALTH_TIMEOUT, headers=self._headers()
            ) as client:
                response = await client.get(f"{self._base_url}/health")
            return response.is_success
        except httpx.HTTPError as exc:
            logger.warning("purchases_api_health_failed", error=str(exc))
            return False
