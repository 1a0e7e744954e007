# juliaydavid/core/context.py
"""
Everything a request handler needs, built once per application.

Lives on ``app.state.ctx``; endpoints reach it through
``api.deps.get_context`` instead of importing module-level singletons,
so tests can build an app with their own settings and blob store.
"""
from dataclasses import dataclass
from typing import Optional

from juliaydavid.core.config import Settings
from juliaydavid.db.session import create_engine_from_settings
from juliaydavid.db.store import Store
from juliaydavid.security.hashing import PasswordHasher
from juliaydavid.security.jwt import TokenService
from juliaydavid.security.policy import AccessPolicy
from juliaydavid.services.auth import AuthController
from juliaydavid.services.calendar import CalendarController
from juliaydavid.services.content import ContentController
from juliaydavid.services.images import ImageController
from juliaydavid.services.messages import MessageController
from juliaydavid.services.nest import NestController
from juliaydavid.storage.blobs import BlobStore


@dataclass
class AppContext:
    settings: Settings
    store: Store
    blobs: BlobStore
    tokens: TokenService
    hasher: PasswordHasher
    policy: AccessPolicy
    auth: AuthController
    content: ContentController
    images: ImageController
    messages: MessageController
    calendar: CalendarController
    nest: NestController


def build_context(settings: Settings, blobs: Optional[BlobStore] = None) -> AppContext:
    store = Store(create_engine_from_settings(settings))
    blobs = blobs or BlobStore.from_settings(settings)
    tokens = TokenService(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    policy = AccessPolicy(settings.allowed_usernames)

    return AppContext(
        settings=settings,
        store=store,
        blobs=blobs,
        tokens=tokens,
        hasher=hasher,
        policy=policy,
        auth=AuthController(store, hasher, tokens),
        content=ContentController(store, policy),
        images=ImageController(store, policy, blobs, max_bytes=settings.MAX_IMAGE_BYTES),
        messages=MessageController(store, policy),
        calendar=CalendarController(store, policy),
        nest=NestController(store, policy, blobs, max_bytes=settings.MAX_FILE_BYTES),
    )
