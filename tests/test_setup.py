import asyncio

from fastapi.testclient import TestClient
from sqlalchemy import func, select

from juliaydavid.core.context import build_context
from juliaydavid.db.init_db import init_models, seed_initial_data
from juliaydavid.main import create_app
from juliaydavid.models import User
from tests.conftest import login


def test_restart_keeps_existing_rows(settings):
    with TestClient(create_app(settings)) as client:
        client.put("/api/content", json={"section": "historia", "text": "Editada"}, headers=login(client, "Julia"))

    settings.SEED_USER_PASSWORDS = {"Julia": "otra-clave", "David": "david-secreto"}
    with TestClient(create_app(settings)) as client:
        historia = [row for row in client.get("/api/content").json() if row["section"] == "historia"]
        assert historia[0]["text"] == "Editada"
        # The stored hash is not replaced by a new seed password
        login(client, "Julia", "julia-secreta")


def test_seed_creates_each_user_once(settings):
    async def scenario():
        ctx = build_context(settings)
        try:
            await init_models(ctx.store.engine)
            await seed_initial_data(ctx)
            await seed_initial_data(ctx)
            async with ctx.store.session() as db:
                result = await db.execute(select(func.count()).select_from(User))
                return result.scalar_one()
        finally:
            await ctx.store.dispose()

    assert asyncio.run(scenario()) == 3
