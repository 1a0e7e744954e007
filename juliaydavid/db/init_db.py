# juliaydavid/db/init_db.py
"""
Setup routine: create the tables, the two accounts and the default texts.

Runs on every application start and can be run by hand:

    python -m juliaydavid.db.init_db

Existing users and sections are never overwritten.
"""
import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine

from juliaydavid.core.config import get_settings
from juliaydavid.core.context import AppContext, build_context
from juliaydavid.db.base import Base
from juliaydavid.models import ContentSection, User

logger = logging.getLogger(__name__)

DEFAULT_SECTIONS = {
    "historia": (
        "Nuestra historia comenzó el 20 de septiembre de 2025, cuando nuestros caminos se "
        "cruzaron de una manera que solo el destino podría haber planeado. Desde ese primer "
        "momento, supimos que algo especial estaba naciendo entre nosotros. Cada día juntos es "
        "una nueva aventura, llena de risas, complicidad y un amor que crece más fuerte con el tiempo."
    ),
    "planes": (
        "Nuestros sueños están llenos de planes increíbles: viajar por el mundo, crear recuerdos "
        "inolvidables y construir juntos el futuro que siempre imaginamos. Queremos explorar nuevos "
        "lugares, disfrutar de cada momento y seguir escribiendo nuestra historia de amor, capítulo "
        "a capítulo, día a día."
    ),
}


async def init_models(engine: AsyncEngine) -> None:
    try:
        async with engine.begin() as conn:
            logger.info("Creating database tables")
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error(f"Could not create tables: {e}")
        raise


async def seed_initial_data(ctx: AppContext) -> None:
    store = ctx.store
    async with store.session() as db:
        async with store.transaction(db):
            for username, password in ctx.settings.SEED_USER_PASSWORDS.items():
                result = await store.execute(db, select(User).where(User.username == username))
                if result.scalars().first() is not None:
                    continue
                if not password:
                    logger.warning("No password given for %s; account not created", username)
                    continue
                db.add(User(username=username, password_hash=ctx.hasher.hash(password)))
                logger.info("Created user %s", username)

            for section, text in DEFAULT_SECTIONS.items():
                result = await store.execute(
                    db, select(ContentSection).where(ContentSection.section == section)
                )
                if result.scalars().first() is None:
                    db.add(ContentSection(section=section, text=text))
                    logger.info("Inserted default content %r", section)


async def main() -> None:
    settings = get_settings()
    ctx = build_context(settings)
    try:
        await init_models(ctx.store.engine)
        await seed_initial_data(ctx)
    finally:
        await ctx.store.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
