# app/db/init.py
# Conexão Mongo (motor): um cliente por processo, aberto no startup e fechado no shutdown

from __future__ import annotations
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import settings

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None

# ping do startup desiste em 3s (o startup repete até 20x)
SERVER_SELECTION_TIMEOUT_MS = 3000

async def init_db(uri: Optional[str] = None, name: Optional[str] = None) -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is not None:
        return _db

    client = AsyncIOMotorClient(
        uri or settings.MONGO_URI,
        appname="fitchef-api",
        serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
    )
    db = client[name or settings.MONGO_DB]
    try:
        await db.command("ping")
    except Exception:
        client.close()
        raise

    _client, _db = client, db
    return _db

def get_db() -> AsyncIOMotorDatabase:
    # handle das rotas (via Depends). Falha se ainda não inicializado
    if _db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return _db

async def close_db() -> None:
    global _client, _db
    if _client:
        _client.close()
    _client = None
    _db = None
