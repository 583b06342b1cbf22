"""Session token models."""

from datetime import datetime
from typing import NewType

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)


class TokenClaims(BaseModel):
    """Identity carried inside a signed token.

    Nothing is stored server-side; the token is valid until expires_at.
    """

    username: str
    issued_at: datetime
    expires_at: datetime


class LoginResult(BaseModel):
    token: AuthToken
    username: str
