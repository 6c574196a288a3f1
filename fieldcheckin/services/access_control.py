"""
Event access rules for the owner/delegate hierarchy.

An owner sees the events it created. A delegate sees exactly its owner's
events and nothing else; a delegate that has not been attached to an owner
sees nothing. These checks are pure: they never touch the database and never
raise for malformed input, they just deny.
"""

from fieldcheckin.core.errors import Forbidden
from fieldcheckin.models.account import AccountRole


def _role(account) -> AccountRole | None:
    try:
        return AccountRole(getattr(account, "role", None))
    except (ValueError, TypeError):
        return None


def scope_owner_id(account) -> str | None:
    """Id of the owner whose events the account may see, or None for no scope"""
    role = _role(account)
    if role is AccountRole.OWNER:
        return getattr(account, "id", None)
    if role is AccountRole.DELEGATE:
        return getattr(account, "owner_id", None)
    return None


def can_access(event, account) -> bool:
    if event is None or account is None:
        return False
    owner_id = scope_owner_id(account)
    if owner_id is None:
        return False
    return getattr(event, "owner_id", None) == owner_id


def can_delete(event, account) -> bool:
    """Only the creating owner may delete; delegates never can"""
    if event is None or account is None:
        return False
    if _role(account) is not AccountRole.OWNER:
        return False
    account_id = getattr(account, "id", None)
    return account_id is not None and getattr(event, "owner_id", None) == account_id


def ensure_access(event, account) -> None:
    if not can_access(event, account):
        raise Forbidden("Access denied to this event")
