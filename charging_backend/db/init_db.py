# charging_backend/db/init_db.py
from charging_backend.db.base import Base
from charging_backend.db.session import engine

# import models so SQLAlchemy registers tables before create_all()
from charging_backend.db.models import profiles, stations  # noqa: F401

async def init_db(bind=engine):
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
