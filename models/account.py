"""
FolderSync Client - Account Models

Pydantic models for the registration, session, password and account endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """User object as sent to and returned by the account endpoints"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None


class AccountResponse(BaseModel):
    """User plus optional validation errors and/or message"""
    model_config = ConfigDict(extra='ignore')

    user: Optional[User] = None
    errors: List[str] = Field(default_factory=list)
    message: Optional[str] = None
