"""
Ownership and visibility rules for properties and inquiries.

Both services ask this module, and only this module, whether a caller may
read or write a record:

* Property: anyone may read; only the owner may write.
* Inquiry: the sender and the owner of the referenced property may read
  and write; nobody else may.
* An unresolved caller (no usable bearer token) is denied everything
  except the public property read.

A denial for an unresolved caller surfaces as ``UnauthorizedError`` and a
denial for a resolved caller as ``ForbiddenError``.
"""

from dataclasses import dataclass
from typing import Optional, Union
import enum
import logging
import uuid

from estate_api.models.inquiry import Inquiry
from estate_api.models.property import Property
from estate_api.utils.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    READ = "read"
    WRITE = "write"


class Decision(str, enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class InquiryScope:
    """
    A set of inquiries addressed by the parties entitled to them.

    ``InquiryScope(property_owner_id=p.owner_id)`` stands for every inquiry
    about ``p``; ``InquiryScope(sender_id=u)`` for every inquiry sent by ``u``.
    """

    sender_id: Optional[uuid.UUID] = None
    property_owner_id: Optional[uuid.UUID] = None

    @classmethod
    def of(cls, inquiry: Inquiry) -> "InquiryScope":
        return cls(sender_id=inquiry.sender_id, property_owner_id=inquiry.property_owner_id)


Resource = Union[Property, Inquiry, InquiryScope]


def authorize(actor: Optional[uuid.UUID], action: Action, resource: Resource) -> Decision:
    """
    Decide whether ``actor`` may perform ``action`` on ``resource``.

    Args:
        actor: Resolved user id, or None for an anonymous caller
        action: READ or WRITE
        resource: Property, Inquiry (with its property loaded) or InquiryScope

    Returns:
        Decision.ALLOW or Decision.DENY
    """
    if isinstance(resource, Property):
        if action == Action.READ:
            return Decision.ALLOW
        return Decision.ALLOW if resource.is_owned_by(actor) else Decision.DENY

    if isinstance(resource, Inquiry):
        resource = InquiryScope.of(resource)

    if isinstance(resource, InquiryScope):
        if actor is None:
            return Decision.DENY
        if actor in (resource.sender_id, resource.property_owner_id):
            return Decision.ALLOW
        return Decision.DENY

    raise TypeError(f"Unsupported resource type: {type(resource).__name__}")


def enforce(
    actor: Optional[uuid.UUID],
    action: Action,
    resource: Resource,
    detail: str = "Forbidden"
) -> None:
    """
    Raise unless ``authorize`` allows the call.

    Raises:
        UnauthorizedError: actor is None and access is denied
        ForbiddenError: actor is resolved and access is denied
    """
    if authorize(actor, action, resource) == Decision.ALLOW:
        return

    if actor is None:
        raise UnauthorizedError()

    logger.info(f"Denied {action.value} on {type(resource).__name__} for user {actor}")
    raise ForbiddenError(detail)


def require_actor(actor: Optional[uuid.UUID]) -> uuid.UUID:
    """Fail with UnauthorizedError for an anonymous caller."""
    if actor is None:
        raise UnauthorizedError()
    return actor
