"""
Account directory: creation and the owner/delegate edge
"""

import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fieldcheckin.core.errors import Forbidden, NotFound, ValidationError
from fieldcheckin.models import Account, AccountRole
from fieldcheckin.services.repositories import AccountRepo

logger = logging.getLogger(__name__)


def _check_owner_edge(delegate: Account, owner: Account) -> None:
    """The hierarchy is exactly one level deep"""
    if delegate.role != AccountRole.DELEGATE:
        raise ValidationError("Only delegate accounts can be assigned an owner")
    if owner.role != AccountRole.OWNER:
        raise ValidationError("Delegates can only be assigned to owner accounts")
    if owner.owner_id is not None:
        raise ValidationError("An account that has an owner cannot own delegates")
    if owner.id is not None and owner.id == delegate.id:
        raise ValidationError("An account cannot own itself")


class AccountService:
    """Service for account records; credentials are handled elsewhere"""

    @staticmethod
    def create_account(
        db: Session,
        name: str,
        email: str,
        role: str,
        owner_id: Optional[str] = None,
    ) -> Account:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name or not email:
            raise ValidationError("Name and email are required")
        try:
            role = AccountRole(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")

        if AccountRepo.get_by_email(db, email):
            raise ValidationError("Account with this email already exists")

        account = Account(name=name, email=email, role=role)
        if owner_id is not None:
            owner = AccountService.get_account(db, owner_id)
            _check_owner_edge(account, owner)
            account.owner_id = owner.id

        db.add(account)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Account with this email already exists")
        db.refresh(account)
        logger.info(f"Account {account.id} created with role {account.role.value}")
        return account

    @staticmethod
    def get_account(db: Session, account_id: str) -> Account:
        account = AccountRepo.get_by_id(db, account_id)
        if not account:
            raise NotFound("Account not found")
        return account

    @staticmethod
    def assign_owner(db: Session, delegate: Account, owner: Account) -> Account:
        """Attach an unassigned delegate to an owner"""
        _check_owner_edge(delegate, owner)
        if delegate.owner_id == owner.id:
            return delegate
        if delegate.owner_id is not None:
            raise Forbidden("Delegate is already assigned to another owner")
        delegate.owner_id = owner.id
        db.commit()
        db.refresh(delegate)
        logger.info(f"Delegate {delegate.id} assigned to owner {owner.id}")
        return delegate

    @staticmethod
    def list_delegates(db: Session, owner: Account) -> List[Account]:
        if owner.role != AccountRole.OWNER:
            return []
        return AccountRepo.list_delegates(db, owner.id)
