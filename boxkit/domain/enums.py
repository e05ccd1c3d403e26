from __future__ import annotations

from enum import Enum

__all__ = [
    "CURRENT_USER_ID",
    "CollaborationRole",
    "CollaborationStatus",
    "ItemType",
    "AllowlistDirection",
    "TermsOfServiceType",
    "TermsOfServiceStatus",
]

# The API resolves "me" to the user the access token belongs to.
CURRENT_USER_ID = "me"


class CollaborationRole(str, Enum):
    editor = "editor"
    viewer = "viewer"
    previewer = "previewer"
    uploader = "uploader"
    previewer_uploader = "previewer uploader"
    viewer_uploader = "viewer uploader"
    co_owner = "co-owner"
    owner = "owner"


class CollaborationStatus(str, Enum):
    accepted = "accepted"
    pending = "pending"
    rejected = "rejected"


class ItemType(str, Enum):
    file = "file"
    folder = "folder"


class AllowlistDirection(str, Enum):
    """Which collaborations an allowlisted domain applies to.

    inbound covers collaborations inside the enterprise, outbound covers
    collaborations with users outside it, both covers either.
    """

    inbound = "inbound"
    outbound = "outbound"
    both = "both"


class TermsOfServiceType(str, Enum):
    managed = "managed"
    external = "external"


class TermsOfServiceStatus(str, Enum):
    enabled = "enabled"
    disabled = "disabled"
