# app/api/routes_openai.py
# Estado/validação da chave OpenAI

from __future__ import annotations
import logging

import openai
from fastapi import APIRouter

from app.core.exceptions import FitChefError
from app.db.models.schemas import ApiKeyIn, KeyStatusOut, KeyTestOut
from app.services.openai_client import KEY_PREFIX, api_key_configured, openai_client

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["openai"])


@router.get("/check-api-key", response_model=KeyStatusOut)
async def check_api_key():
    """A chave do servidor está configurada? (não chama a OpenAI)"""
    return KeyStatusOut(configured=api_key_configured())


@router.post("/test-openai", response_model=KeyTestOut)
async def test_openai_key(payload: ApiKeyIn):
    """
    Testa uma chave informada pelo usuário com uma chamada barata (models.list)
    """
    key = (payload.api_key or "").strip()
    if not key.startswith(KEY_PREFIX):
        raise FitChefError(400, "Chave API inválida. Deve começar com 'sk-'")

    try:
        async with openai_client(key) as client:
            await client.models.list()
    except openai.AuthenticationError as e:
        log.info("test-openai: key rejected (401)")
        raise FitChefError(401, "Chave API inválida ou expirada") from e
    except Exception as e:
        log.exception("test-openai failed: %s", e)
        raise FitChefError(500, "Erro ao validar chave API") from e

    return KeyTestOut(success=True, message="Chave API validada com sucesso!")
