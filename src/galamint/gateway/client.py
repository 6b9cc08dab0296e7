"""GalaChain gateway client.

Every call is a single JSON POST to ``{base_url}/{Method}``. Failures are
raised as GatewayError and never retried.
"""

import logging
from functools import lru_cache
from typing import Any, Optional

import httpx

from galamint.config import get_settings
from galamint.errors import GatewayError
from galamint.gateway import dtos
from galamint.gateway.keys import expiration_timestamp
from galamint.gateway.responses import (
    AuthorizationPage,
    TokenClassSupply,
    decode_authorization_page,
    decode_token_class_supply,
)

logger = logging.getLogger(__name__)

HEADERS = {
    "Content-Type": "application/json",
    "accept": "application/json",
}


class GalaChainClient:
    """Async client for the GalaChain token-contract REST gateway."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Token-contract base URL (no trailing method segment)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _post(self, method: str, body: Any) -> Any:
        url = f"{self.base_url}/{method}"
        logger.debug(f"GalaChain {method} request")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, content=dtos.to_json(body), headers=HEADERS)
        except httpx.HTTPError as e:
            logger.warning(f"GalaChain {method} transport error: {e}")
            raise GatewayError(f"GalaChain {method} request failed: {e}") from e

        if not response.is_success:
            error_text = response.text
            logger.warning(f"GalaChain {method} error: {response.status_code}")
            raise GatewayError(
                f"GalaChain API error: {response.status_code} - {error_text}",
                upstream_status=response.status_code,
                body=error_text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(
                f"GalaChain {method} returned malformed JSON",
                upstream_status=response.status_code,
                body=response.text,
            ) from e

    async def submit_signed(self, method: str, payload: Any) -> Any:
        """Forward an already-signed DTO verbatim."""
        return await self._post(method, payload)

    async def grant_collection_authorization(
        self,
        authorized_user: str,
        collection: str,
        unique_key: str,
    ) -> Any:
        dto = dtos.grant_authorization_dto(
            authorized_user, collection, unique_key, expiration_timestamp()
        )
        return await self._post(dtos.GRANT_AUTHORIZATION, dto)

    async def create_nft_collection(self, collection_data: dict) -> Any:
        """Create an NFT collection (token class). ``collection_data`` must hold uniqueKey."""
        dto = {**collection_data, "dtoExpiresAt": expiration_timestamp()}
        return await self._post(dtos.CREATE_COLLECTION, dto)

    async def fetch_collection_authorizations(
        self,
        bookmark: Optional[str] = None,
        limit: int = 100,
    ) -> AuthorizationPage:
        payload = await self._post(
            dtos.FETCH_AUTHORIZATIONS,
            {"bookmark": bookmark or "", "limit": limit},
        )
        page = decode_authorization_page(payload)
        if page.shape == "unrecognized":
            logger.warning("Unrecognized collection authorization page from GalaChain")
        return page

    async def fetch_token_classes_with_supply(
        self, token_classes: list[dict]
    ) -> list[TokenClassSupply]:
        payload = await self._post(
            dtos.FETCH_TOKEN_CLASSES,
            {"tokenClasses": [dict(tc) for tc in token_classes]},
        )
        return decode_token_class_supply(payload)

    async def mint_token_with_allowance(
        self,
        owner: str,
        quantity: str,
        token_class: dict,
        unique_key: str,
        token_instance: str = "0",
    ) -> Any:
        dto = dtos.mint_dto(
            owner, quantity, token_class, unique_key, expiration_timestamp(), token_instance
        )
        return await self._post(dtos.MINT_WITH_ALLOWANCE, dto)

    async def dry_run(self, method: str, dto: Any) -> Any:
        """Simulate ``method`` with ``dto`` without committing; used for fee estimates."""
        return await self._post(dtos.DRY_RUN, dtos.dry_run_dto(method, dto))


@lru_cache
def get_gateway() -> GalaChainClient:
    """Get the configured gateway client (FastAPI dependency)."""
    settings = get_settings()
    return GalaChainClient(settings.galachain_api, timeout=settings.galachain_timeout)
