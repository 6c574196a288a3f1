"""
Client for the external identity registry.

Lookups are narrowed by the event's own location: the top-level region is
always sent, the mid-level region only when the event has one, and the local
region only when the mid-level region is present too. Callers never supply
filters themselves.

The gateway is one-shot: no caching and no retry. A registry that answers
"no match" yields ``None``; anything else that goes wrong is a
``LookupServiceError`` so that an outage is never mistaken for an unknown
person.
"""

import logging
from typing import Dict, Optional

import httpx
from pydantic import ValidationError as SchemaError

from fieldcheckin.core.config import settings
from fieldcheckin.core.errors import LookupServiceError, PreconditionFailed
from fieldcheckin.schemas.participant import VerifiedRecord

logger = logging.getLogger(__name__)


def build_filters(event) -> Dict[str, str]:
    """Derive the registry filter from an event's region hierarchy"""
    region = getattr(event, "region", None)
    if not region:
        raise PreconditionFailed("Event must have a region to perform identity lookup")

    filters = {"region": region}
    mid_region = getattr(event, "mid_region", None)
    if mid_region:
        filters["mid_region"] = mid_region
        local_region = getattr(event, "local_region", None)
        if local_region:
            filters["local_region"] = local_region
    return filters


class IdentityGateway:
    """Looks up identity numbers against the registry"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.IDENTITY_REGISTRY_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.IDENTITY_REGISTRY_API_KEY
        self.timeout = timeout if timeout is not None else settings.IDENTITY_REGISTRY_TIMEOUT
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def lookup(self, id_number: str, filters: Dict[str, str]) -> Optional[VerifiedRecord]:
        """Return the matching record, or None when the registry has no match"""
        payload = {"id_number": id_number, **filters}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/lookup",
                    json=payload,
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            raise LookupServiceError(details={"reason": f"{type(e).__name__}: {e}"}) from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise LookupServiceError(details={"reason": f"registry returned HTTP {response.status_code}"})

        if not response.content.strip():
            return None
        try:
            data = response.json()
        except ValueError as e:
            raise LookupServiceError(details={"reason": "registry returned invalid JSON"}) from e

        if data is None:
            return None
        if not isinstance(data, dict):
            raise LookupServiceError(details={"reason": "registry returned an unexpected payload"})

        try:
            return VerifiedRecord.model_validate(data)
        except SchemaError as e:
            raise LookupServiceError(details={"reason": "registry record failed validation"}) from e

    async def verify_for_event(self, event, id_number: str) -> Optional[VerifiedRecord]:
        """Look up an identity number within the event's location"""
        filters = build_filters(event)
        try:
            record = await self.lookup(id_number, filters)
        except LookupServiceError as e:
            # Logged once, with this context, by the application error handler
            e.details = {
                **(e.details or {}),
                "event_id": getattr(event, "id", None),
                "id_number": id_number,
                "filters": filters,
            }
            raise

        if record is None:
            logger.info(f"No registry match for event {getattr(event, 'id', None)} filters={filters}")
        return record


identity_gateway = IdentityGateway()


def get_identity_gateway() -> IdentityGateway:
    """FastAPI dependency; overridden in tests"""
    return identity_gateway
