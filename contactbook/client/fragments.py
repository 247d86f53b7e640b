"""
UI fragments

Thin pieces of the contacts page. Each is mounted with a props mapping and
the shared store; none of them talks to the gateway directly, and several may
be mounted on the same page at once.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Set
import logging

from contactbook.client.gateway import RequestError
from contactbook.client.store import ContactStore
from contactbook.schemas.contact import Contact

log = logging.getLogger(__name__)


class Fragment(ABC):
    def __init__(self, store: ContactStore, props: Optional[Mapping[str, Any]] = None):
        self.store = store
        self.props = dict(props or {})
        self._subscriptions = []

    def destroy(self) -> None:
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions = []

    @abstractmethod
    def render(self) -> str:
        ...


class ContactCount(Fragment):
    """Count badge. A fixed ``count`` prop takes precedence over the store."""

    def __init__(self, store: ContactStore, props: Optional[Mapping[str, Any]] = None):
        super().__init__(store, props)
        self.count = self.props.get("count")
        if self.count is None:
            self._subscriptions.append(store.count.subscribe(self._on_count))

    def _on_count(self, count: int) -> None:
        self.count = count

    def render(self) -> str:
        return f"Total: {self.count}"


class ContactList(Fragment):
    """One row per contact. Rows whose last save failed are flagged; a failed
    delete is reported once above the rows, since its row is already gone.
    """

    def __init__(self, store: ContactStore, props: Optional[Mapping[str, Any]] = None):
        super().__init__(store, props)
        self.contacts: List[Contact] = []
        self.errors: Set[int] = set()
        self.notice: Optional[str] = None
        if "contacts" in self.props:
            store.hydrate(self.props["contacts"])
        self._subscriptions.append(store.contacts.subscribe(self._on_contacts))

    def _on_contacts(self, contacts: List[Contact]) -> None:
        self.contacts = contacts
        self.errors &= {contact.id for contact in contacts}

    async def save_row(self, contact: Contact) -> bool:
        try:
            await self.store.save(contact)
        except RequestError as exc:
            log.warning("Saving contact %s failed: %s", contact.id, exc)
            self.errors.add(contact.id)
            return False
        self.errors.discard(contact.id)
        return True

    async def delete_row(self, contact: Contact) -> bool:
        try:
            await self.store.delete(contact)
        except RequestError as exc:
            log.warning("Deleting contact %s failed: %s", contact.id, exc)
            self.notice = f"Could not delete contact {contact.id}: {exc}"
            return False
        self.notice = None
        return True

    def render_row(self, contact: Contact) -> str:
        fields = [contact.name or "", contact.email or "", contact.twitter or "", contact.phone or ""]
        markers = []
        if contact.saving:
            markers.append("saving")
        if contact.id in self.errors:
            markers.append("error")
        row = " | ".join(fields)
        if markers:
            row += f" [{', '.join(markers)}]"
        return row

    def render(self) -> str:
        lines = [self.render_row(contact) for contact in self.contacts]
        if self.notice:
            lines.insert(0, self.notice)
        return "\n".join(lines)


class NewContactButton(Fragment):
    label = "New contact"

    async def click(self) -> Contact:
        return await self.store.create(Contact(name="", email="", twitter="", phone=""))

    def render(self) -> str:
        return self.label


FRAGMENTS: Dict[str, type] = {
    "ContactList": ContactList,
    "NewContactButton": NewContactButton,
    "ContactCount": ContactCount,
}


def mount(name: str, store: ContactStore, props: Optional[Mapping[str, Any]] = None) -> Fragment:
    try:
        fragment_cls = FRAGMENTS[name]
    except KeyError:
        raise ValueError(f"Unknown fragment: {name}") from None
    return fragment_cls(store, props)
