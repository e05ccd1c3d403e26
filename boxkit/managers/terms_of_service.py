"""Manager for terms of service and the per-user acceptance records."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from ..domain.enums import TermsOfServiceStatus, TermsOfServiceType
from ..domain.paths import url_path
from ..errors import BoxError, response_body
from ..logging_conf import get_logger
from ..models import (
    Reference,
    TermsOfServiceCreate,
    TermsOfServiceUpdate,
    UserStatusCreate,
    UserStatusUpdate,
    user_reference,
)

if TYPE_CHECKING:
    from ..client import BoxClient

logger = get_logger("boxkit.terms_of_service")

# Base path for all terms of service endpoints
BASE_PATH = "/terms_of_services"
USER_STATUSES_PATH = "/terms_of_service_user_statuses"


def _user_status_body(
    tos_id: str, is_accepted: bool, options: Mapping[str, Any] | None
) -> dict[str, Any]:
    user_id = (options or {}).get("user_id")
    return UserStatusCreate(
        tos=Reference(type="terms_of_service", id=str(tos_id)),
        is_accepted=is_accepted,
        user=user_reference(user_id) if user_id else None,
    ).to_json()


class TermsOfService:
    """Enterprise terms of service and whether users have accepted them."""

    type = TermsOfServiceType
    status = TermsOfServiceStatus

    def __init__(self, client: BoxClient) -> None:
        self.client = client

    async def create(
        self,
        tos_type: TermsOfServiceType | str,
        status: TermsOfServiceStatus | str,
        text: str,
    ) -> dict:
        body = TermsOfServiceCreate(
            status=TermsOfServiceStatus(status),
            tos_type=TermsOfServiceType(tos_type),
            text=text,
        ).to_json()
        return await self.client.call("POST", url_path(BASE_PATH), json=body)

    async def update(
        self, tos_id: str, updates: TermsOfServiceUpdate | Mapping[str, Any]
    ) -> dict:
        """Change the status and/or text of a terms of service."""
        body = updates.to_json() if isinstance(updates, TermsOfServiceUpdate) else dict(updates)
        return await self.client.call("PUT", url_path(BASE_PATH, tos_id), json=body)

    async def get(self, tos_id: str, options: Mapping[str, Any] | None = None) -> dict:
        return await self.client.call("GET", url_path(BASE_PATH, tos_id), params=options)

    async def get_all(self, options: Mapping[str, Any] | None = None) -> dict:
        """List the enterprise's terms of service; options: tos_type, fields."""
        return await self.client.call("GET", url_path(BASE_PATH), params=options)

    async def create_user_status(
        self, tos_id: str, is_accepted: bool, options: Mapping[str, Any] | None = None
    ) -> dict:
        """Record whether a user accepted a terms of service.

        options.user_id targets another user; otherwise the current user.
        """
        body = _user_status_body(tos_id, is_accepted, options)
        return await self.client.call("POST", url_path(USER_STATUSES_PATH), json=body)

    async def get_user_status(
        self, tos_id: str, options: Mapping[str, Any] | None = None
    ) -> dict | None:
        """Return the user's status for a terms of service, or None if there is none.

        The endpoint answers with a collection; only its first entry is returned.
        """
        params: dict[str, Any] = {"tos_id": tos_id}
        params.update(options or {})
        response = await self.client.get(url_path(USER_STATUSES_PATH), params=params)
        if response.status_code != httpx.codes.OK:
            raise self.client.unexpected(response)
        entries = (response_body(response) or {}).get("entries") or []
        return entries[0] if entries else None

    async def update_user_status(self, user_status_id: str, is_accepted: bool) -> dict:
        body = UserStatusUpdate(is_accepted=is_accepted).to_json()
        return await self.client.call("PUT", url_path(USER_STATUSES_PATH, user_status_id), json=body)

    async def set_user_status(
        self, tos_id: str, is_accepted: bool, options: Mapping[str, Any] | None = None
    ) -> dict:
        """Create the user's status, or update it if one already exists.

        - 2xx: the created status is returned
        - 409: the existing status is looked up and updated in place
        - anything else raises UnexpectedResponseError
        """
        body = _user_status_body(tos_id, is_accepted, options)
        response = await self.client.post(url_path(USER_STATUSES_PATH), json=body)

        if response.is_success:
            return response_body(response)

        if response.status_code == httpx.codes.CONFLICT:
            logger.info(
                "tos.user_status_exists",
                extra={"event": "tos_user_status_exists", "tos_id": tos_id},
            )
            lookup = {"fields": "id", **(options or {})}
            existing = await self.get_user_status(tos_id, lookup)
            if existing is None:
                raise BoxError(
                    f"terms of service {tos_id} reported a conflicting user status that could not be found"
                )
            return await self.update_user_status(existing["id"], is_accepted)

        raise self.client.unexpected(response)
