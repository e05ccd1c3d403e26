"""Thin async managers over the Box REST API.

Usage::

    async with BoxClient(access_token="...") as client:
        collab = await client.collaborations.get("1234")
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("boxkit")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# __version__ must exist before the client module imports it.
from .client import BoxClient, with_callback  # noqa: E402
from .config import Config  # noqa: E402
from .domain.enums import (  # noqa: E402
    AllowlistDirection,
    CollaborationRole,
    CollaborationStatus,
    ItemType,
    TermsOfServiceStatus,
    TermsOfServiceType,
)
from .errors import (  # noqa: E402
    AuthError,
    BoxError,
    InvalidPathError,
    ResponseError,
    UnexpectedResponseError,
)

__all__ = [
    "__version__",
    "BoxClient",
    "Config",
    "with_callback",
    "AllowlistDirection",
    "CollaborationRole",
    "CollaborationStatus",
    "ItemType",
    "TermsOfServiceStatus",
    "TermsOfServiceType",
    "AuthError",
    "BoxError",
    "InvalidPathError",
    "ResponseError",
    "UnexpectedResponseError",
]
