"""Manager for the /collaborations endpoints."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..domain.enums import CollaborationRole, CollaborationStatus, ItemType
from ..domain.paths import url_path
from ..models import AccessibleBy, CollaborationCreate, CollaborationUpdate, item_reference

if TYPE_CHECKING:
    from ..client import BoxClient

BASE_PATH = "/collaborations"


class Collaborations:
    """Create, inspect, update and remove collaborations on files and folders."""

    roles = CollaborationRole
    statuses = CollaborationStatus

    def __init__(self, client: BoxClient) -> None:
        self.client = client

    async def get(self, collaboration_id: str, options: Mapping[str, Any] | None = None) -> dict:
        """Fetch one collaboration; `options` is sent as the query (e.g. fields)."""
        return await self.client.call("GET", url_path(BASE_PATH, collaboration_id), params=options)

    async def get_pending(self) -> dict:
        """List the current user's pending collaborations."""
        return await self.client.call(
            "GET", BASE_PATH, params={"status": CollaborationStatus.pending.value}
        )

    async def update(
        self, collaboration_id: str, updates: CollaborationUpdate | Mapping[str, Any]
    ) -> dict:
        """Change a collaboration (role, status, can_view_path, expires_at)."""
        body = updates.to_json() if isinstance(updates, CollaborationUpdate) else dict(updates)
        return await self._update(collaboration_id, body)

    async def respond_to_pending(
        self, collaboration_id: str, new_status: CollaborationStatus | str
    ) -> dict:
        """Accept or reject a pending collaboration."""
        body = CollaborationUpdate(status=CollaborationStatus(new_status)).to_json()
        return await self._update(collaboration_id, body)

    async def _update(self, collaboration_id: str, body: dict[str, Any]) -> dict:
        return await self.client.call("PUT", url_path(BASE_PATH, collaboration_id), json=body)

    async def create(
        self,
        accessible_by: AccessibleBy | Mapping[str, Any],
        item_id: str,
        role: CollaborationRole | str,
        *,
        type: ItemType | str = ItemType.folder,
        notify: bool | None = None,
        can_view_path: bool | None = None,
        is_access_only: bool | None = None,
    ) -> dict:
        """Grant `accessible_by` access to an item with the given role.

        `notify` is a query flag and only sent when explicitly set; the
        body flags are likewise omitted unless given.
        """
        if isinstance(accessible_by, AccessibleBy):
            accessible_by = accessible_by.to_json()
        body = CollaborationCreate(
            item=item_reference(type, item_id),
            accessible_by=dict(accessible_by),
            role=role,
            can_view_path=can_view_path,
            is_access_only=is_access_only,
        ).to_json()
        params = {"notify": notify} if notify is not None else None
        return await self.client.call("POST", BASE_PATH, params=params, json=body)

    async def create_with_user_id(
        self, user_id: str | int, item_id: str, role: CollaborationRole | str, **options: Any
    ) -> dict:
        accessible_by = AccessibleBy(type="user", id=str(user_id))
        return await self.create(accessible_by, item_id, role, **options)

    async def create_with_user_email(
        self, email: str, item_id: str, role: CollaborationRole | str, **options: Any
    ) -> dict:
        accessible_by = AccessibleBy(type="user", login=email)
        return await self.create(accessible_by, item_id, role, **options)

    async def create_with_group_id(
        self, group_id: str | int, item_id: str, role: CollaborationRole | str, **options: Any
    ) -> dict:
        accessible_by = AccessibleBy(type="group", id=str(group_id))
        return await self.create(accessible_by, item_id, role, **options)

    async def delete(self, collaboration_id: str) -> None:
        await self.client.call("DELETE", url_path(BASE_PATH, collaboration_id))
