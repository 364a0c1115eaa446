"""store.py — Process-lifetime in-memory collections for stateful mock entities.

A ``MockStore`` simulates one database table: it is seeded lazily on first
access, keyed by an opaque id, and mutated in place by POST/PUT/PATCH/DELETE
handlers for as long as the process lives.

Concurrency:
    Every mutation is plain synchronous Python with no ``await`` inside, so
    on a single event loop each call is atomic. There is no transaction
    spanning several calls: a reorder racing a delete can reorder a stale
    view. That is fine for fixtures and is not production behavior.

Called by: mock/comments.py, mock/datasets.py, mock/registry.py, api/routes/*
Depends on: core/errors.py, mock/pagination.py
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from backoffice.core.errors import EmptyOrderListError, InvalidPayloadError
from backoffice.mock.fixtures import now_iso
from backoffice.mock.pagination import filter_items, sort_items

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

Entity = dict[str, Any]


def validate_payload(schema: type[ModelT], payload: Any) -> ModelT:
    """Validate ``payload`` against ``schema`` or raise InvalidPayloadError.

    The message names the first offending field, e.g.
    ``"price: Input should be a valid number"``.
    """
    if not isinstance(payload, Mapping):
        raise InvalidPayloadError("Request body must be a JSON object")
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise InvalidPayloadError(f"{field}: {first['msg']}") from exc


class MockStore:
    """Keyed, ordered, mutable collection of one entity kind.

    Args:
        name: Collection name, used in logs.
        seeder: Returns the initial entities. Called once per lifecycle.
        id_factory: Returns a fresh opaque id for created entities.
        create_schema: Pydantic model that ``create`` payloads must satisfy.
        update_schema: Pydantic model that ``update`` patches must satisfy.
        id_field: Key holding the entity id.
        order_field: Key rewritten by ``reorder``.
    """

    # Created entities go to the front of the collection instead of the back.
    insert_first = False

    def __init__(
        self,
        name: str,
        seeder: Callable[[], list[Entity]],
        id_factory: Callable[[], str],
        create_schema: type[BaseModel] | None = None,
        update_schema: type[BaseModel] | None = None,
        *,
        id_field: str = "id",
        order_field: str = "order",
    ) -> None:
        self.name = name
        self._seeder = seeder
        self._id_factory = id_factory
        self._create_schema = create_schema
        self._update_schema = update_schema
        self.id_field = id_field
        self.order_field = order_field
        self._items: dict[str, Entity] = {}
        self._seeded = False
        self.version = 1

    # ─── Lifecycle ────────────────────────────────────────────────────────────

    def ensure_dataset(self) -> dict[str, Entity]:
        """Seed on first call; later calls return the same mapping untouched."""
        if self._seeded:
            return self._items
        for entity in self._seeder():
            self._items[entity[self.id_field]] = entity
        self._seeded = True
        logger.info("mock_store_seeded store=%s count=%d", self.name, len(self._items))
        return self._items

    def reset(self) -> None:
        """Drop all entities; the next access reseeds."""
        self._items.clear()
        self._seeded = False
        self.version = 1

    def _bump(self) -> None:
        self.version += 1

    def __len__(self) -> int:
        return len(self.ensure_dataset())

    # ─── Reads ────────────────────────────────────────────────────────────────

    def all(self) -> list[Entity]:
        return list(self.ensure_dataset().values())

    def find_by_id(self, entity_id: str) -> Entity | None:
        return self.ensure_dataset().get(entity_id)

    def list(
        self,
        exact: Mapping[str, Any] | None = None,
        contains: Mapping[str, str] | None = None,
        sort_by: str | None = None,
        sort_dir: str = "asc",
    ) -> list[Entity]:
        """Entities matching every predicate, optionally sorted."""
        items = filter_items(self.all(), exact, contains)
        return sort_items(items, sort_by, sort_dir)

    # ─── Writes ───────────────────────────────────────────────────────────────

    def build_entity(self, data: dict[str, Any]) -> Entity:
        """Turn a validated create payload into a stored entity."""
        now = now_iso()
        return {self.id_field: self._id_factory(), **data, "createdAt": now, "updatedAt": now}

    def create(self, payload: Any) -> Entity:
        """Validate, assign a new id, store and return the entity.

        The entity is appended, or prepended when ``insert_first`` is set.

        Raises:
            InvalidPayloadError: Missing or wrong-typed fields.
        """
        self.ensure_dataset()
        if self._create_schema is not None:
            data = validate_payload(self._create_schema, payload).model_dump(by_alias=True)
        else:
            data = dict(payload)
        entity = self.build_entity(data)
        if self.insert_first:
            rest = list(self._items.items())
            self._items.clear()
            self._items[entity[self.id_field]] = entity
            self._items.update(rest)
        else:
            self._items[entity[self.id_field]] = entity
        self._bump()
        logger.info("mock_store_created store=%s id=%s", self.name, entity[self.id_field])
        return entity

    def apply_patch(self, entity: Entity, patch: dict[str, Any]) -> Entity:
        """Merge a validated patch into ``entity``. Override for business rules."""
        entity.update(patch)
        return entity

    def update(self, entity_id: str, patch: Any) -> Entity | None:
        """Merge ``patch`` into an entity; ``None`` if the id is unknown.

        Only keys present in the patch are touched.
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            return None
        if self._update_schema is not None:
            data = validate_payload(self._update_schema, patch).model_dump(by_alias=True, exclude_unset=True)
        else:
            data = dict(patch)
        data.pop(self.id_field, None)
        self.apply_patch(entity, data)
        entity["updatedAt"] = now_iso()
        self._bump()
        return entity

    def replace(self, entity_id: str, entity: Entity) -> Entity | None:
        """Swap in a whole new entity under an existing id."""
        existing = self.find_by_id(entity_id)
        if existing is None:
            return None
        entity = {**entity, self.id_field: entity_id, "createdAt": existing.get("createdAt", now_iso())}
        entity["updatedAt"] = now_iso()
        self._items[entity_id] = entity
        self._bump()
        return entity

    def remove(self, entity_id: str) -> bool:
        items = self.ensure_dataset()
        if entity_id not in items:
            return False
        del items[entity_id]
        self._bump()
        logger.info("mock_store_removed store=%s id=%s", self.name, entity_id)
        return True

    def reorder(self, ordered_ids: list[str]) -> list[Entity]:
        """Rewrite ``order`` to follow ``ordered_ids``.

        Mentioned entities take positions 0..n-1 in the given order. Unknown
        and repeated ids are ignored. Entities not mentioned keep their
        previous relative order and follow the reordered block.

        Returns:
            Every entity, in the new order.

        Raises:
            EmptyOrderListError: If ``ordered_ids`` is empty.
        """
        if not ordered_ids:
            raise EmptyOrderListError()

        items = self.ensure_dataset()
        mentioned: list[Entity] = []
        seen: set[str] = set()
        for entity_id in ordered_ids:
            if entity_id in items and entity_id not in seen:
                seen.add(entity_id)
                mentioned.append(items[entity_id])

        rest = sort_items(
            (entity for entity_id, entity in items.items() if entity_id not in seen),
            self.order_field,
        )

        now = now_iso()
        result = mentioned + rest
        for position, entity in enumerate(result):
            if entity.get(self.order_field) != position or entity[self.id_field] in seen:
                entity["updatedAt"] = now
            entity[self.order_field] = position

        # Keep the mapping's iteration order in sync with the new ordering.
        items.clear()
        items.update((entity[self.id_field], entity) for entity in result)
        self._bump()
        logger.info("mock_store_reordered store=%s moved=%d total=%d", self.name, len(mentioned), len(result))
        return result
