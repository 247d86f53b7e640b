from contextlib import asynccontextmanager
from typing import Iterable, Optional

import httpx

from contactbook.client.gateway import ContactGateway
from contactbook.client.store import ContactStore
from contactbook.core.config import Settings, settings as default_settings


@asynccontextmanager
async def page_session(
    initial_contacts: Optional[Iterable] = None,
    settings: Settings = default_settings,
    client: Optional[httpx.AsyncClient] = None,
):
    """One gateway and one store for the lifetime of a page."""
    async with ContactGateway.from_settings(settings, client=client) as gateway:
        store = ContactStore(gateway)
        if initial_contacts is not None:
            store.hydrate(initial_contacts)
        try:
            yield store
        finally:
            store.count.close()
