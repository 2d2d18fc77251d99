"""Auth Pydantic schemas — registration / login bodies, token output, token claims."""

from typing import Optional

from pydantic import BaseModel


class Credentials(BaseModel):
    """Body of POST /api/register and POST /api/login.

    Both fields are optional at the schema level so that an empty or missing
    value reaches the service and is reported as a 400 with a readable message.
    """
    email: Optional[str] = None
    password: Optional[str] = None


class AuthOut(BaseModel):
    id: int
    email: str
    token: str


class TokenClaims(BaseModel):
    """Identity carried inside a bearer token."""
    id: int
    email: str
