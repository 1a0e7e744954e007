# juliaydavid/security/jwt.py
"""
Session tokens: HS256 JWTs carrying {sub, username, iat, exp}.

Verification is purely cryptographic. The database is never consulted,
so a token stays valid until it expires even if the account changes.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from jose.exceptions import ExpiredSignatureError
from pydantic import ValidationError as PydanticValidationError

from juliaydavid.core.errors import ConfigError, ExpiredToken, MalformedToken
from juliaydavid.schemas.auth import TokenPayload


@dataclass(frozen=True)
class Identity:
    user_id: int
    username: str


class TokenService:
    def __init__(self, secret_key: Optional[str], algorithm: str = "HS256", expire_minutes: int = 60):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.default_ttl = timedelta(minutes=expire_minutes)

    def _require_secret(self) -> str:
        if not self._secret_key:
            raise ConfigError(detail="SECRET_KEY no está definida")
        return self._secret_key

    def create_access_token(
        self,
        user_id: int,
        username: str,
        expires_delta: Optional[timedelta] = None,
        issued_at: Optional[datetime] = None,
    ) -> str:
        secret = self._require_secret()
        issued_at = issued_at or datetime.now(timezone.utc)
        expire = issued_at + (expires_delta or self.default_ttl)
        to_encode = {
            "sub": str(user_id),
            "username": username,
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(to_encode, secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        secret = self._require_secret()
        try:
            payload = jwt.decode(token, secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise ExpiredToken()
        except JWTError as exc:
            raise MalformedToken(detail=str(exc))

        try:
            token_data = TokenPayload(**payload)
            user_id = int(token_data.sub)
        except (PydanticValidationError, ValueError):
            raise MalformedToken(detail="claims incompletos")

        return Identity(user_id=user_id, username=token_data.username)
