# juliaydavid/security/policy.py
"""Two-person allowlist: anyone may read, only the couple may write."""
import enum
from typing import Iterable, Optional

from juliaydavid.core.errors import AuthError, Forbidden
from juliaydavid.security.jwt import Identity


class Action(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class AccessPolicy:
    def __init__(self, allowed_usernames: Iterable[str]):
        self.allowed_usernames = frozenset(allowed_usernames)

    def authorize(self, identity: Optional[Identity], action: Action) -> bool:
        if action is Action.READ:
            return True
        if identity is None:
            return False
        return identity.username in self.allowed_usernames

    def require(self, identity: Optional[Identity], action: Action, message: Optional[str] = None) -> Identity:
        """Return the identity if it may perform ``action``, else raise 401/403."""
        if identity is None and action is not Action.READ:
            raise AuthError()
        if not self.authorize(identity, action):
            raise Forbidden(message)
        return identity
