"""Logic layer for the client roster."""

from groomdesk.app.logic.store import EntityStore
from groomdesk.core.domain_models import Client, ClientDraft, Table


class ClientStore(EntityStore[Client]):
    table = Table.CLIENTS.value
    model = Client
    order_by = "name"

    def sort_key(self, item: Client) -> str:
        return item.name.casefold()

    def add(self, draft: ClientDraft) -> Client:
        return self.create(draft)

    def search(self, term: str) -> list[Client]:
        """Filter by owner or pet name, case-insensitive."""
        needle = term.strip().casefold()
        if not needle:
            return list(self.items)
        return [
            c
            for c in self.items
            if needle in c.name.casefold() or (c.pet_name and needle in c.pet_name.casefold())
        ]
