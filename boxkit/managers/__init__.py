"""Resource managers; each wraps one family of API endpoints."""
from .collaboration_allowlist import CollaborationAllowlist, CollaborationWhitelist
from .collaborations import Collaborations
from .terms_of_service import TermsOfService

__all__ = [
    "Collaborations",
    "CollaborationAllowlist",
    "CollaborationWhitelist",
    "TermsOfService",
]
