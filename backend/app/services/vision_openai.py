# app/services/vision_openai.py
# Ingredientes a partir de fotos (OpenAI Vision)
# - só Chat Completions, imagens como data URL
# - parse do JSON tolerante (cercas markdown), nunca levanta por saída ruim

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from openai import AsyncOpenAI

from app.services.openai_client import chat_text
from app.services.prompts import (
    VISION_DETAILED_PROMPT,
    VISION_SIMPLE_PROMPT,
    VISION_SIMPLE_SYSTEM,
)
from app.services.utils import safe_json_loads, unique_names

log = logging.getLogger(__name__)


def _image_parts(images: Sequence[str], detail: Optional[str] = None) -> List[Dict[str, Any]]:
    parts: List[Dict[str, Any]] = []
    for url in images:
        image_url: Dict[str, Any] = {"url": url}
        if detail:
            image_url["detail"] = detail
        parts.append({"type": "image_url", "image_url": image_url})
    return parts


async def detect_ingredients(
    client: AsyncOpenAI,
    images: Sequence[str],
    detailed: bool = True,
) -> Optional[Any]:
    """
    data URLs -> objeto JSON do modelo ({"ingredients": [...]}) ou None se não der pra parsear.
    Erros da API (401/429/403...) sobem para a rota classificar.
    """
    if detailed:
        messages = [
            {
                "role": "user",
                "content": [{"type": "text", "text": VISION_DETAILED_PROMPT}, *_image_parts(images, "high")],
            }
        ]
        max_tokens = 1500
    else:
        messages = [
            {"role": "system", "content": VISION_SIMPLE_SYSTEM},
            {
                "role": "user",
                "content": [{"type": "text", "text": VISION_SIMPLE_PROMPT}, *_image_parts(images)],
            },
        ]
        max_tokens = 1000

    log.info("vision request: %d image(s), detailed=%s", len(images), detailed)
    text = await chat_text(client, messages=messages, max_tokens=max_tokens, temperature=0.3)
    return safe_json_loads(text)


def extract_ingredient_names(data: Any) -> Optional[List[str]]:
    # None quando o formato não bate; lista (talvez vazia) quando bate
    if not isinstance(data, dict) or not isinstance(data.get("ingredients"), list):
        return None
    # às vezes vem [{"name": "tomate"}, ...] em vez de strings
    items = [i.get("name") if isinstance(i, dict) else i for i in data["ingredients"]]
    return unique_names(items)
