# app/main.py
# Inicialização do FastAPI e registro dos routers
# cada router define o próprio prefix

from __future__ import annotations

import logging
from asyncio import sleep

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes_analyze import router as analyze_router      # fotos -> ingredientes -> receitas
from app.api.routes_favorites import router as favorites_router  # favoritos
from app.api.routes_openai import router as openai_router        # status/teste da chave
from app.api.routes_recipes import router as recipes_router      # receitas salvas + compartilhar
from app.core.config import settings
from app.core.exceptions import FitChefError, fitchef_error_handler, validation_error_handler
from app.db.indexes import ensure_indexes
from app.db.init import close_db, get_db, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="FitChef - API", version="0.1.0")

# CORS: front em localhost:3000 + cookie anon_id
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(FitChefError, fitchef_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

@app.on_event("startup")
async def on_startup() -> None:
    # 1) conecta no banco primeiro (até 20 tentativas, 1s de intervalo)
    db = None
    for i in range(20):
        try:
            db = await init_db()
            log.info("[startup] db ready")
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("[startup] db init failed after retries")
        return

    # 2) garante os índices
    try:
        await ensure_indexes()
        log.info("[startup] indexes ensured")
    except Exception as e:
        log.error("[startup] ensure_indexes failed: %s", e)

@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_db()

@app.get("/")
async def root():
    return {"status": "ok"}

@app.get("/health")
async def health():
    # healthcheck simples + ping no Mongo
    ok = {"status": "ok", "db": "skip"}
    try:
        db = get_db()
        await db.command("ping")
        ok["db"] = "ok"
    except Exception as e:
        ok["db"] = f"error: {e}"
    return ok

app.include_router(analyze_router)
app.include_router(openai_router)
app.include_router(recipes_router)
app.include_router(favorites_router)
