# app/services/recipe_llm.py
# Geração de receitas a partir da lista de ingredientes (OpenAI Chat)

from __future__ import annotations
import logging
from typing import Any, List, Optional, Sequence

from openai import AsyncOpenAI
from pydantic import ValidationError

from app.db.models.schemas import GeneratedRecipe
from app.services.openai_client import chat_text
from app.services.prompts import (
    HEALTHY_CHEF_SYSTEM,
    HEALTHY_RECIPES_PROMPT,
    SIMPLE_CHEF_SYSTEM,
    SIMPLE_RECIPES_PROMPT,
)
from app.services.utils import safe_json_loads

log = logging.getLogger(__name__)

HEALTHY_COUNT = 4
SIMPLE_COUNT = 3


async def generate_recipes(
    client: AsyncOpenAI,
    ingredients: Sequence[str],
    healthy: bool = True,
) -> Optional[Any]:
    """
    Ingredientes -> objeto JSON do modelo ({"recipes": [...]}) ou None.
    healthy=True: 4 receitas saudáveis com dados nutricionais (fluxo principal)
    healthy=False: 3 receitas simples (rota legada)
    """
    joined = ", ".join(ingredients)
    if healthy:
        system = HEALTHY_CHEF_SYSTEM
        prompt = HEALTHY_RECIPES_PROMPT.format(ingredients=joined, count=HEALTHY_COUNT)
        max_tokens = 4500
    else:
        system = SIMPLE_CHEF_SYSTEM
        prompt = SIMPLE_RECIPES_PROMPT.format(ingredients=joined, count=SIMPLE_COUNT)
        max_tokens = 2000

    log.info("recipe request: %d ingredient(s), healthy=%s", len(ingredients), healthy)
    text = await chat_text(
        client,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ],
        max_tokens=max_tokens,
        temperature=0.8,
    )
    return safe_json_loads(text)


def _looks_valid(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    ings = item.get("ingredients")
    steps = item.get("instructions")
    return bool(
        item.get("name")
        and item.get("type")
        and isinstance(ings, list)
        and isinstance(steps, list)
        and any(isinstance(s, str) and s.strip() for s in ings)
        and any(isinstance(s, str) and s.strip() for s in steps)
    )


def filter_valid_recipes(raw: Any) -> List[GeneratedRecipe]:
    # descarta receitas sem nome/tipo ou com ingredientes/instruções vazios
    if not isinstance(raw, list):
        return []
    out: List[GeneratedRecipe] = []
    for i, item in enumerate(raw):
        if not _looks_valid(item):
            log.info("dropping malformed recipe #%d", i)
            continue
        try:
            out.append(GeneratedRecipe.model_validate(item))
        except ValidationError as e:
            log.warning("dropping recipe #%d: %s", i, e.errors())
    return out
