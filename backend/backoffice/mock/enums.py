"""enums.py — Keyed in-memory store for site-setting enum groups.

Groups are addressed by name (``ad_placements``, ``tour_categories`` ...)
rather than by generated id, so this store is a plain name → group map
instead of a ``MockStore``. A plain lookup of a missing name returns
``None``; the mutating operations raise the specific 404 the route needs.

Called by: mock/registry.py, api/routes/enums.py
Depends on: mock/fixtures.py, mock/store.py, models/schemas.py
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from backoffice.core.errors import ConflictError, GroupNotFoundError, ValueNotFoundError
from backoffice.mock.fixtures import now_iso
from backoffice.mock.store import validate_payload
from backoffice.models.schemas import (
    CreateEnumGroupPayload,
    EnumValueInput,
    UpdateEnumGroupPayload,
    UpsertEnumValuesPayload,
)

logger = logging.getLogger(__name__)

EnumGroup = dict[str, Any]


def _sorted_values(values: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(values, key=lambda v: v.get("order") or 0)


def _value_from_input(value: EnumValueInput, default_order: int) -> dict[str, Any]:
    return {
        "key": value.key,
        "value": value.value if value.value is not None else value.key,
        "label": value.label,
        "description": value.description,
        "order": value.order if value.order is not None else default_order,
        "active": value.active if value.active is not None else True,
    }


class EnumGroupStore:
    """Name-keyed collection of enum groups.

    Args:
        seeder: Returns the initial groups. Called once per lifecycle.
    """

    def __init__(self, seeder: Callable[[], list[EnumGroup]]) -> None:
        self._seeder = seeder
        self._groups: dict[str, EnumGroup] = {}
        self._seeded = False

    def ensure_dataset(self) -> dict[str, EnumGroup]:
        if self._seeded:
            return self._groups
        for group in self._seeder():
            self._groups[group["name"]] = group
        self._seeded = True
        logger.info("mock_store_seeded store=enums count=%d", len(self._groups))
        return self._groups

    def reset(self) -> None:
        self._groups.clear()
        self._seeded = False

    # ─── Reads ────────────────────────────────────────────────────────────────

    def all(self) -> list[EnumGroup]:
        return list(self.ensure_dataset().values())

    def get(self, name: str) -> EnumGroup | None:
        return self.ensure_dataset().get(name)

    def _require(self, name: str) -> EnumGroup:
        group = self.get(name)
        if group is None:
            raise GroupNotFoundError(name)
        return group

    # ─── Writes ───────────────────────────────────────────────────────────────

    def create_group(self, payload: Any) -> EnumGroup:
        """Create a group from a ``CreateEnumGroupPayload``.

        Raises:
            InvalidPayloadError: Payload does not match the schema.
            ConflictError: A group with this name already exists.
        """
        data = validate_payload(CreateEnumGroupPayload, payload)
        groups = self.ensure_dataset()
        if data.name in groups:
            raise ConflictError(f"Enum group '{data.name}' already exists")

        group = {
            "name": data.name,
            "description": data.description,
            "values": _sorted_values([_value_from_input(v, i) for i, v in enumerate(data.values)]),
            "version": 1,
            "updatedAt": now_iso(),
        }
        groups[group["name"]] = group
        logger.info("enum_group_created name=%s values=%d", data.name, len(group["values"]))
        return group

    def update_group(self, name: str, payload: Any) -> EnumGroup:
        """Merge a partial update into a group; values are matched by key."""
        group = self._require(name)
        data = validate_payload(UpdateEnumGroupPayload, payload)

        if "description" in data.model_fields_set:
            group["description"] = data.description

        values = {v["key"]: v for v in group["values"]}
        for patch in data.values:
            changes = patch.model_dump(exclude_unset=True)
            if patch.key in values:
                values[patch.key].update(changes)
            else:
                values[patch.key] = {
                    "key": patch.key,
                    "value": changes.get("value", patch.key),
                    "label": changes.get("label"),
                    "description": changes.get("description"),
                    "order": changes.get("order", 0),
                    "active": changes.get("active", True),
                }
        group["values"] = _sorted_values(list(values.values()))
        self._touch(group)
        return group

    def upsert_values(self, name: str, payload: Any) -> EnumGroup:
        """Add or replace values. Creates the group if it does not exist."""
        data = validate_payload(UpsertEnumValuesPayload, payload)
        groups = self.ensure_dataset()
        group = groups.get(name)

        if group is None:
            group = {
                "name": name,
                "description": None,
                "values": _sorted_values([_value_from_input(v, i) for i, v in enumerate(data.values)]),
                "version": 1,
                "updatedAt": now_iso(),
            }
            groups[name] = group
            return group

        if data.replace:
            group["values"] = _sorted_values([_value_from_input(v, i) for i, v in enumerate(data.values)])
        else:
            values = {v["key"]: v for v in group["values"]}
            for value in data.values:
                previous_order = values[value.key].get("order", 0) if value.key in values else 0
                values[value.key] = _value_from_input(value, previous_order)
            group["values"] = _sorted_values(list(values.values()))
        self._touch(group)
        return group

    def remove_value_from_group(self, name: str, value_key: str) -> EnumGroup:
        """Remove one value from a group.

        Raises:
            GroupNotFoundError: No group named ``name``.
            ValueNotFoundError: The group exists but has no ``value_key``.
        """
        group = self._require(name)
        remaining = [v for v in group["values"] if v["key"] != value_key]
        if len(remaining) == len(group["values"]):
            raise ValueNotFoundError(name, value_key)
        group["values"] = remaining
        self._touch(group)
        logger.info("enum_value_removed group=%s key=%s", name, value_key)
        return group

    def delete_group(self, name: str) -> bool:
        groups = self.ensure_dataset()
        if name not in groups:
            return False
        del groups[name]
        return True

    @staticmethod
    def _touch(group: EnumGroup) -> None:
        group["version"] = group.get("version", 1) + 1
        group["updatedAt"] = now_iso()
