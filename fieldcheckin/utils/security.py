"""
Authentication boundary.

Tokens are issued by the identity provider this service sits behind; here
they are only verified and mapped to an account. The resolved account is
passed explicitly into every service call.
"""

from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from fieldcheckin.core.config import settings
from fieldcheckin.core.db import get_db
from fieldcheckin.models import Account, AccountRole
from fieldcheckin.services.repositories import AccountRepo

security = HTTPBearer(auto_error=False)

def decode_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None

def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db)
) -> Account:
    """Resolve the bearer token to an account"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    account_id = payload.get("sub")
    if not account_id:
        raise credentials_exception

    account = AccountRepo.get_by_id(db, account_id)
    if account is None:
        raise credentials_exception
    return account

def require_owner(account: Account = Depends(get_current_account)) -> Account:
    """Verify the caller is an owner account"""
    if account.role != AccountRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Owner account required"
        )
    return account
