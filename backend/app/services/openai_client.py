# app/services/openai_client.py
# Cliente OpenAI (SDK v1, async) + verificação da chave

from __future__ import annotations
import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from app.core.config import settings
from app.core.exceptions import InvalidApiKeyFormatError, MissingApiKeyError

log = logging.getLogger(__name__)

KEY_PREFIX = "sk-"


def api_key_configured() -> bool:
    key = (settings.OPENAI_API_KEY or "").strip()
    return key.startswith(KEY_PREFIX)


def require_api_key(strict: bool = True) -> str:
    """Devolve a chave configurada ou levanta o erro de configuração.

    `strict` também exige o prefixo "sk-" (rota principal); as rotas legadas
    só checam presença e usam a própria mensagem.
    """
    key = (settings.OPENAI_API_KEY or "").strip()
    if not key:
        log.error("OPENAI_API_KEY is not set")
        if strict:
            raise MissingApiKeyError(
                details="Configure a variável OPENAI_API_KEY nas configurações do projeto."
            )
        raise MissingApiKeyError(
            error="Chave da OpenAI não configurada. Configure nas variáveis de ambiente."
        )
    if strict:
        if not key.startswith(KEY_PREFIX):
            log.error("OPENAI_API_KEY has an invalid format (must start with %r)", KEY_PREFIX)
            raise InvalidApiKeyFormatError()
        log.info("OPENAI_API_KEY configured with a valid format")
    return key


def openai_client(api_key: Optional[str] = None) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key or require_api_key(), timeout=settings.OPENAI_TIMEOUT)


async def chat_text(client: AsyncOpenAI, **params: Any) -> str:
    # primeira escolha do chat completion ("" se vier vazio)
    params.setdefault("model", settings.OPENAI_MODEL)
    chat = await client.chat.completions.create(**params)
    if not chat or not chat.choices:
        return ""
    return chat.choices[0].message.content or ""
