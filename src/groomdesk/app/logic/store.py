"""Local list state for one remote table.

Every entity screen follows the same loop: fetch the table, render the
list, mutate a row. Mutations are applied locally first; when the backend
rejects an update or a delete the store throws its local copy away and
refetches the table, so the screen never keeps diverging from the backend.
"""

from typing import Any, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from groomdesk.core.backend import BackendError, BackendGateway

T = TypeVar("T", bound=BaseModel)


class EntityStore(Generic[T]):
    """Optimistic, refetch-on-failure list state for a remote table.

    Subclasses set `table`, `model` and `order_by` and implement `sort_key`.
    """

    table: str
    model: type[T]
    order_by: str | None = None

    def __init__(self, gateway: BackendGateway) -> None:
        self.gateway = gateway
        self.items: list[T] = []
        self.loaded = False
        self.active = True
        self.last_error: str | None = None

    def sort_key(self, item: T) -> Any:
        raise NotImplementedError

    # --- Reads ---

    def refresh(self) -> list[T]:
        """Replace local items with the backend's rows.

        On failure the current items are kept and `last_error` is set.
        Results arriving after `close()` are dropped.
        """
        try:
            rows = self.gateway.fetch_all(self.table, order_by=self.order_by)
        except BackendError as e:
            logger.error(f"Error fetching {self.table}: {e}")
            self.last_error = e.message
            return self.items

        if not self.active:
            logger.debug(f"Dropping {self.table} fetch result for a closed store")
            return self.items

        self.items = self._sorted(self._validate_rows(rows))
        self.loaded = True
        logger.debug(f"Loaded {len(self.items)} {self.table}")
        return self.items

    def _validate_rows(self, rows: list[dict[str, Any]]) -> list[T]:
        """Validate fetched rows, skipping the ones that do not fit the model.

        Skipped rows are reported through `last_error`.
        """
        items: list[T] = []
        for row in rows:
            try:
                items.append(self.model.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid {self.table} row {row.get('id')}: {e.error_count()} errors"
                )
        skipped = len(rows) - len(items)
        self.last_error = f"{skipped} registro(s) inválido(s) ignorado(s)" if skipped else None
        return items

    def ensure_loaded(self) -> list[T]:
        """Fetch once per view entry; later reruns reuse the local list."""
        if not self.loaded:
            self.refresh()
        return self.items

    def get(self, item_id: str) -> T | None:
        return next((item for item in self.items if self._id(item) == item_id), None)

    # --- Writes ---

    def create(self, draft: BaseModel) -> T:
        """Insert a validated draft and add the created row to the list.

        Raises:
            BackendError: If the backend rejects the insert
        """
        row = self.gateway.insert(self.table, draft.to_payload())  # type: ignore[attr-defined]
        item = self.model.model_validate(row)
        if self.active:
            self.items = self._sorted([*self.items, item])
        return item

    def delete(self, item_id: str) -> bool:
        """Remove locally, then remotely. A remote failure triggers a refetch."""
        self.items = [item for item in self.items if self._id(item) != item_id]
        try:
            self.gateway.delete(self.table, item_id)
        except BackendError as e:
            logger.error(f"Error deleting {self.table}/{item_id}, refetching: {e}")
            self.refresh()
            return False
        return True

    def _update(self, item_id: str, changes: dict[str, Any]) -> bool:
        """Apply changes locally, then remotely. A remote failure triggers a refetch."""
        self.items = [
            item.model_copy(update=changes) if self._id(item) == item_id else item
            for item in self.items
        ]
        try:
            self.gateway.update(self.table, item_id, changes)
        except BackendError as e:
            logger.error(f"Error updating {self.table}/{item_id}, refetching: {e}")
            self.refresh()
            return False
        return True

    # --- Lifecycle ---

    def invalidate(self) -> None:
        """Mark stale so the next `ensure_loaded()` refetches."""
        self.loaded = False

    def close(self) -> None:
        self.active = False
        self.items = []
        self.loaded = False

    def reopen(self) -> None:
        self.active = True

    def _sorted(self, items: Any) -> list[T]:
        return sorted(items, key=self.sort_key)

    @staticmethod
    def _id(item: BaseModel) -> str:
        return str(getattr(item, "id"))
