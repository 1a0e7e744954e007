# juliaydavid/schemas/auth.py
from typing import Optional

from pydantic import BaseModel


# Body of POST /login. Fields are optional so that a missing one is
# reported as our own 400 "Usuario y contraseña requeridos".
class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    username: str


class TokenPayload(BaseModel):
    sub: str
    username: str
