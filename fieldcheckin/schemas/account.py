"""
Account-related Pydantic schemas
"""

from typing import Optional
from pydantic import BaseModel

from fieldcheckin.models.account import AccountRole

class AccountResponse(BaseModel):
    """Account as seen by its holder"""
    id: str
    name: str
    email: str
    role: AccountRole
    owner_id: Optional[str] = None

    class Config:
        from_attributes = True

class DelegateAssign(BaseModel):
    """Attach an existing delegate account to the calling owner"""
    delegate_id: str
