import asyncio
from typing import List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from contactbook.api.deps import get_repository
from contactbook.client.gateway import ContactGateway, RequestError
from contactbook.main import app
from contactbook.schemas.contact import Contact
from contactbook.services.contact_repository import ContactRepository


class FakeGateway:
    """Records calls; each operation can be made to fail or to wait on an event."""

    def __init__(self):
        self.calls = []
        self.next_id = 100
        self.fail = set()
        self.hold: Optional[asyncio.Event] = None
        self.created: List[Contact] = []

    async def _maybe_block(self, operation: str):
        if self.hold is not None:
            await self.hold.wait()
        if operation in self.fail:
            raise RequestError("Internal Server Error", status_code=500)

    async def list(self):
        self.calls.append(("list",))
        await self._maybe_block("list")
        return list(self.created)

    async def create(self, contact: Contact) -> Contact:
        self.calls.append(("create", contact.name))
        await self._maybe_block("create")
        self.next_id += 1
        created = Contact(id=self.next_id, **contact.model_dump(include={"name", "email", "twitter", "phone"}))
        self.created.append(created)
        return created

    async def update(self, contact_id: int, contact: Contact):
        self.calls.append(("update", contact_id))
        await self._maybe_block("update")
        return Contact(id=contact_id, name=(contact.name or "").strip())

    async def delete(self, contact_id: int) -> None:
        self.calls.append(("delete", contact_id))
        await self._maybe_block("delete")


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def repo():
    repository = ContactRepository()
    app.dependency_overrides[get_repository] = lambda: repository
    yield repository
    app.dependency_overrides.pop(get_repository, None)


@pytest.fixture
def client(repo):
    return TestClient(app)


@pytest.fixture
def asgi_gateway(repo):
    """Gateway wired to the application in-process."""
    def build():
        http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
        return ContactGateway(client=http), http
    return build
