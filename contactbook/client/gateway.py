"""
Contact gateway

JSON-over-HTTP client for a contacts collection resource.

One call is one round-trip: no retries, no caching. Failures of any kind
surface as RequestError; nothing is recovered here.
"""

from typing import Any, List, Optional, Tuple
import logging

import httpx
from pydantic import ValidationError

from contactbook.core.config import Settings, settings as default_settings
from contactbook.schemas.contact import Contact

log = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class RequestError(Exception):
    """A request did not succeed.

    ``status_code`` is None when no response was received at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ContactGateway:
    def __init__(
        self,
        base_url: str = "",
        path: str = "/contacts",
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.path = path.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings = default_settings, client: Optional[httpx.AsyncClient] = None):
        return cls(
            base_url=settings.API_BASE_URL,
            path=settings.CONTACTS_PATH,
            timeout=settings.REQUEST_TIMEOUT,
            client=client,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def collection_url(self) -> str:
        return f"{self.path}.json"

    def member_url(self, contact_id: int) -> str:
        return f"{self.path}/{contact_id}.json"

    async def request(self, method: str, url: str, data: Optional[dict] = None) -> Any:
        """Send one JSON request and return the decoded body.

        A successful response with an empty or unparsable body decodes to
        ``{}``; update and delete endpoints may legitimately return nothing.
        """
        _, body = await self._exchange(method, url, data)
        return body

    async def _exchange(self, method: str, url: str, data: Optional[dict] = None) -> Tuple[int, Any]:
        log.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, json=data, headers=JSON_HEADERS)
        except httpx.HTTPError as exc:
            log.warning("%s %s failed: %s", method, url, exc)
            raise RequestError(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            log.warning("%s %s -> %s %s", method, url, response.status_code, response.reason_phrase)
            raise RequestError(response.reason_phrase, status_code=response.status_code)

        try:
            return response.status_code, response.json()
        except ValueError:
            return response.status_code, {}

    def _to_contact(self, body: Any, status_code: int) -> Contact:
        try:
            return Contact.model_validate(body)
        except ValidationError as exc:
            log.warning("Unexpected contact body (%s): %r", status_code, body)
            raise RequestError("Unexpected response body", status_code=status_code) from exc

    async def list(self) -> List[Contact]:
        status_code, body = await self._exchange("GET", self.collection_url())
        if not isinstance(body, list):
            return []
        return [self._to_contact(item, status_code) for item in body]

    async def create(self, contact: Contact) -> Contact:
        status_code, body = await self._exchange("POST", self.collection_url(), contact.payload())
        return self._to_contact(body, status_code)

    async def update(self, contact_id: int, contact: Contact) -> Optional[Contact]:
        status_code, body = await self._exchange("PUT", self.member_url(contact_id), contact.payload())
        # Anything but a non-empty object is a bare acknowledgement
        if not body or not isinstance(body, dict):
            return None
        return self._to_contact(body, status_code)

    async def delete(self, contact_id: int) -> None:
        await self._exchange("DELETE", self.member_url(contact_id))
