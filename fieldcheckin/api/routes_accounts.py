"""
Account API routes - the caller's own account and its delegates
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fieldcheckin.core.db import get_db
from fieldcheckin.models import Account
from fieldcheckin.schemas.account import AccountResponse, DelegateAssign
from fieldcheckin.services.account_service import AccountService
from fieldcheckin.utils.security import get_current_account, require_owner
from fieldcheckin.utils.responses import success_response

router = APIRouter()

@router.get("/me")
def get_me(account: Account = Depends(get_current_account)):
    """Return the authenticated account"""
    return success_response(
        message="Account retrieved successfully",
        data={"account": AccountResponse.model_validate(account)}
    )

@router.get("/delegates")
def list_delegates(
    db: Session = Depends(get_db),
    account: Account = Depends(require_owner)
):
    """List delegates attached to the calling owner"""
    delegates = AccountService.list_delegates(db, account)

    return success_response(
        message="Delegates retrieved successfully",
        data={"delegates": [AccountResponse.model_validate(d) for d in delegates]}
    )

@router.post("/delegates")
def assign_delegate(
    assign_data: DelegateAssign,
    db: Session = Depends(get_db),
    account: Account = Depends(require_owner)
):
    """Attach an existing delegate account to the calling owner"""
    delegate = AccountService.get_account(db, assign_data.delegate_id)
    delegate = AccountService.assign_owner(db, delegate, account)

    return success_response(
        message="Delegate assigned successfully",
        data={"account": AccountResponse.model_validate(delegate)}
    )
