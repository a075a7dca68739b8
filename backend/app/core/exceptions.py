# core/exceptions.py
"""
Exceções voltadas ao usuário (mensagens em português)
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class FitChefError(HTTPException):
    """Erro com mensagem localizada: renderizado como {"error", "details"}."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        super().__init__(status_code=status_code, detail=error)
        self.error = error
        self.details = details

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class MissingApiKeyError(FitChefError):
    def __init__(self, error: str = "Chave da API OpenAI não configurada.", details: Optional[str] = None):
        super().__init__(
            status_code=500,
            error=error,
            details=details,
        )


class InvalidApiKeyFormatError(FitChefError):
    def __init__(self):
        super().__init__(
            status_code=500,
            error="Chave da API OpenAI com formato inválido.",
            details="A chave deve começar com 'sk-'. Verifique se copiou corretamente.",
        )


class InvalidApiKeyError(FitChefError):
    def __init__(self):
        super().__init__(
            status_code=401,
            error="Chave da API OpenAI inválida ou expirada.",
            details=(
                "Sua chave OPENAI_API_KEY não está funcionando. Possíveis causas: "
                "1) Chave expirada, 2) Chave incorreta, 3) Sem créditos na conta OpenAI. "
                "Gere uma nova chave em https://platform.openai.com/api-keys"
            ),
        )


class RateLimitedError(FitChefError):
    def __init__(self):
        super().__init__(
            status_code=429,
            error="Limite de requisições atingido",
            details=(
                "Você atingiu o limite de uso da API OpenAI. Isso pode acontecer por:\n\n"
                "1. Limite de requisições por minuto excedido (aguarde 1 minuto)\n"
                "2. Cota mensal esgotada (verifique seu plano)\n"
                "3. Saldo de créditos insuficiente\n\n"
                "Soluções:\n"
                "• Aguarde alguns instantes e tente novamente\n"
                "• Verifique seu uso em: https://platform.openai.com/usage\n"
                "• Adicione créditos em: https://platform.openai.com/account/billing"
            ),
        )


class BillingRestrictedError(FitChefError):
    def __init__(self):
        super().__init__(
            status_code=403,
            error="Acesso negado pela OpenAI.",
            details=(
                "Sua conta OpenAI pode estar com problemas de pagamento ou restrições. "
                "Verifique em https://platform.openai.com/account/billing"
            ),
        )


class DatabaseError(FitChefError):
    def __init__(self, action: str):
        super().__init__(status_code=503, error=f"Erro ao {action}. Tente novamente.")


def classify_openai_error(exc: Exception) -> FitChefError:
    """Mapeia a falha do SDK da OpenAI para a mensagem/status do usuário.

    Só o status HTTP (e o code `invalid_api_key`) decide a classe; o resto
    vira 500 com a mensagem original em `details`.
    """
    status = getattr(exc, "status_code", None)
    code = getattr(exc, "code", None)

    if status == 401 or code == "invalid_api_key":
        return InvalidApiKeyError()
    if status == 429:
        return RateLimitedError()
    if status == 403:
        return BillingRestrictedError()

    return FitChefError(
        status_code=500,
        error="Erro ao processar as imagens.",
        details=str(exc) or "Erro desconhecido. Tente novamente.",
    )


async def fitchef_error_handler(request: Request, exc: FitChefError) -> JSONResponse:
    if exc.status_code >= 500:
        log.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.error)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=exc.headers)


# erro de validação do corpo nas rotas /api: mesma mensagem que a rota daria
VALIDATION_ERRORS = {
    "/api/analyze-food": "Erro ao processar as imagens.",
    "/api/analyze-images": "Erro interno ao processar imagens",
    "/api/generate-recipes": "Erro interno ao processar receitas",
    "/api/test-openai": "Erro ao validar chave API",
}


def _validation_details(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()) if x != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = VALIDATION_ERRORS.get(request.url.path)
    if error is None:
        return await request_validation_exception_handler(request, exc)
    log.warning("%s %s -> invalid body: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=500,
        content=FitChefError(500, error, details=_validation_details(exc)).to_body(),
    )
