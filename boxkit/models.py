"""Request bodies the SDK composes itself.

Response payloads are returned as plain dicts; only what we send is modeled.
Bodies are dumped with exclude_none so optional fields are omitted, not sent
as null.
"""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .domain.enums import (
    AllowlistDirection,
    CollaborationRole,
    CollaborationStatus,
    ItemType,
    TermsOfServiceStatus,
    TermsOfServiceType,
)


class RequestBody(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class Reference(RequestBody):
    """A typed pointer to another object, e.g. {"type": "user", "id": "42"}."""
    type: str
    id: str


class AccessibleBy(RequestBody):
    """Who a collaboration grants access to: a user/group id or a user login."""
    type: Literal["user", "group"]
    id: Optional[str] = None
    login: Optional[str] = None


class CollaborationCreate(RequestBody):
    item: Reference
    accessible_by: dict[str, Any]
    role: CollaborationRole | str
    can_view_path: Optional[bool] = None
    is_access_only: Optional[bool] = None


class CollaborationUpdate(RequestBody):
    role: Optional[CollaborationRole | str] = None
    status: Optional[CollaborationStatus | str] = None
    can_view_path: Optional[bool] = None
    expires_at: Optional[str] = None


class AllowlistEntryCreate(RequestBody):
    domain: str
    direction: AllowlistDirection | str


class ExemptTargetCreate(RequestBody):
    user: Reference


class TermsOfServiceCreate(RequestBody):
    status: TermsOfServiceStatus | str
    tos_type: TermsOfServiceType | str
    text: str


class TermsOfServiceUpdate(RequestBody):
    status: Optional[TermsOfServiceStatus | str] = None
    text: Optional[str] = None


class UserStatusCreate(RequestBody):
    tos: Reference
    is_accepted: bool
    user: Optional[Reference] = None


class UserStatusUpdate(RequestBody):
    is_accepted: bool


def item_reference(item_type: ItemType | str, item_id: str) -> Reference:
    return Reference(type=ItemType(item_type).value, id=str(item_id))


def user_reference(user_id: str | int) -> Reference:
    return Reference(type="user", id=str(user_id))
