"""
Contact store

The single source of truth for the contacts shown on a page. UI fragments
subscribe to ``contacts`` or ``count`` and mutate only through the
operations below, so every change is paired with a notification.

Policies:
- create is pessimistic: nothing is appended until the server has assigned
  an id. A success without an id is treated as a failed request.
- save is status-tracked: the entry's ``saving`` flag is raised while any
  save of that contact is in flight. The server's response is returned to
  the caller but not merged into the entry.
- delete is optimistic and is not rolled back: the entry disappears before
  the request is sent and stays gone if the request fails.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Union
import logging

from contactbook.client.gateway import ContactGateway, RequestError
from contactbook.client.observable import Derived, Writable
from contactbook.schemas.contact import Contact

log = logging.getLogger(__name__)


class ContactStore:
    def __init__(self, gateway: ContactGateway):
        self.gateway = gateway
        self.contacts: Writable[List[Contact]] = Writable([])
        self.count: Derived[int] = Derived(self.contacts, len)
        self._saves_in_flight: Dict[int, int] = {}

    def hydrate(self, initial_contacts: Iterable[Union[Contact, Mapping]]) -> None:
        """Replace the whole collection, typically with server-rendered data."""
        self.contacts.set([
            c if isinstance(c, Contact) else Contact.model_validate(c)
            for c in initial_contacts
        ])

    async def load(self) -> None:
        self.hydrate(await self.gateway.list())

    def find(self, contact_id: Optional[int]) -> Optional[Contact]:
        if contact_id is None:
            return None
        for entry in self.contacts.get():
            if entry.id == contact_id:
                return entry
        return None

    async def create(self, draft: Optional[Contact] = None) -> Contact:
        created = await self.gateway.create(draft or Contact())
        if created.id is None:
            raise RequestError("Server did not assign an id")
        self.contacts.update(lambda contacts: [*contacts, created])
        log.info("Created contact %s", created.id)
        return created

    async def save(self, contact: Contact) -> Optional[Contact]:
        if contact.id is None:
            raise ValueError("Contact has not been created yet")
        entry = self.find(contact.id)
        pending = self._saves_in_flight.get(contact.id, 0)
        self._saves_in_flight[contact.id] = pending + 1
        if not pending:
            self._mark_saving(entry, True)
        try:
            return await self.gateway.update(contact.id, contact)
        finally:
            pending = self._saves_in_flight.pop(contact.id) - 1
            if pending:
                self._saves_in_flight[contact.id] = pending
            else:
                self._mark_saving(entry, False)

    async def delete(self, contact: Contact) -> None:
        if contact.id is None:
            return
        contacts = self.contacts.get()
        remaining = [entry for entry in contacts if entry.id != contact.id]
        if len(remaining) != len(contacts):
            self.contacts.set(remaining)
        await self.gateway.delete(contact.id)
        log.info("Deleted contact %s", contact.id)

    def _mark_saving(self, entry: Optional[Contact], saving: bool) -> None:
        if entry is None:
            return
        entry.saving = saving
        # A delete may have landed while the request was in flight
        if any(e is entry for e in self.contacts.get()):
            self.contacts.update(list)
