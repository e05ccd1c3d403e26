"""Manager for the enterprise collaboration allowlist.

The API still names these endpoints "whitelist"; the SDK calls them allowlist
and keeps CollaborationWhitelist as a deprecated alias.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..domain.enums import AllowlistDirection
from ..domain.paths import url_path
from ..models import AllowlistEntryCreate, ExemptTargetCreate, user_reference

if TYPE_CHECKING:
    from ..client import BoxClient

BASE_PATH = "/collaboration_whitelist_entries"
TARGET_ENTRY_PATH = "/collaboration_whitelist_exempt_targets"


class CollaborationAllowlist:
    """Allowlisted domains and the users exempt from the allowlist."""

    directions = AllowlistDirection

    def __init__(self, client: BoxClient) -> None:
        self.client = client

    # Domains

    async def add_domain(self, domain: str, direction: AllowlistDirection | str) -> dict:
        body = AllowlistEntryCreate(domain=domain, direction=AllowlistDirection(direction)).to_json()
        return await self.client.call("POST", url_path(BASE_PATH), json=body)

    async def get_allowlisted_domain(
        self, domain_id: str, options: Mapping[str, Any] | None = None
    ) -> dict:
        return await self.client.call("GET", url_path(BASE_PATH, domain_id), params=options)

    async def get_all_allowlisted_domains(self, options: Mapping[str, Any] | None = None) -> dict:
        """List allowlist entries; options: limit, marker."""
        return await self.client.call("GET", url_path(BASE_PATH), params=options)

    async def remove_domain(self, domain_id: str) -> None:
        await self.client.call("DELETE", url_path(BASE_PATH, domain_id))

    # Exempt users

    async def add_exemption(self, user_id: str | int) -> dict:
        body = ExemptTargetCreate(user=user_reference(user_id)).to_json()
        return await self.client.call("POST", url_path(TARGET_ENTRY_PATH), json=body)

    async def get_exemption(
        self, exemption_id: str, options: Mapping[str, Any] | None = None
    ) -> dict:
        return await self.client.call("GET", url_path(TARGET_ENTRY_PATH, exemption_id), params=options)

    async def get_all_exemptions(self, options: Mapping[str, Any] | None = None) -> dict:
        """List exempt users; options: limit, marker."""
        return await self.client.call("GET", url_path(TARGET_ENTRY_PATH), params=options)

    async def remove_exemption(self, exemption_id: str) -> None:
        await self.client.call("DELETE", url_path(TARGET_ENTRY_PATH, exemption_id))


# Deprecated name kept for callers written against the old API naming.
CollaborationWhitelist = CollaborationAllowlist
