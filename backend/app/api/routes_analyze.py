# app/api/routes_analyze.py
# Fotos -> ingredientes (Vision) -> receitas (Chat)
# /api/analyze-food é o fluxo principal; analyze-images e generate-recipes são as rotas legadas

from __future__ import annotations
from typing import List, Optional
import logging

import openai
from fastapi import APIRouter, File, UploadFile

from app.core.config import settings
from app.core.exceptions import FitChefError, classify_openai_error
from app.db.models.schemas import (
    AnalyzeFoodIn,
    AnalyzeFoodOut,
    GenerateRecipesIn,
    IngredientsOut,
    RecipesOut,
)
from app.services.openai_client import openai_client, require_api_key
from app.services.recipe_llm import filter_valid_recipes, generate_recipes
from app.services.utils import to_data_url, unique_names
from app.services.vision_openai import detect_ingredients, extract_ingredient_names

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])


@router.post("/analyze-food", response_model=AnalyzeFoodOut)
async def analyze_food(payload: AnalyzeFoodIn):
    """
    Fotos (data URLs) -> ingredientes detectados + 4 receitas saudáveis
    """
    images = [s.strip() for s in payload.images if isinstance(s, str) and s.strip()]
    if not images:
        raise FitChefError(400, "Nenhuma imagem fornecida")

    try:
        async with openai_client(require_api_key(strict=True)) as client:
            data = await detect_ingredients(client, images, detailed=True)
            ingredients = extract_ingredient_names(data)
            if ingredients is None:
                raise FitChefError(
                    400,
                    "Não foi possível identificar ingredientes nas imagens. Tente com fotos mais claras.",
                )
            if not ingredients:
                raise FitChefError(
                    400,
                    "Nenhum ingrediente foi detectado nas imagens. Tente fotografar os alimentos mais de perto.",
                )

            raw = await generate_recipes(client, ingredients, healthy=True)
            if not isinstance(raw, dict) or not isinstance(raw.get("recipes"), list):
                raise FitChefError(500, "Erro ao gerar receitas. Tente novamente.")

            recipes = filter_valid_recipes(raw["recipes"])
            if not recipes:
                raise FitChefError(500, "Não foi possível gerar receitas válidas. Tente novamente.")

    except FitChefError:
        raise
    except openai.OpenAIError as e:
        log.exception("OpenAI call failed: status=%s code=%s", getattr(e, "status_code", None), getattr(e, "code", None))
        raise classify_openai_error(e) from e
    except Exception as e:
        log.exception("analyze-food failed: %s", e)
        raise FitChefError(
            500,
            "Erro ao processar as imagens.",
            details=str(e) or "Erro desconhecido. Tente novamente.",
        ) from e

    log.info("analyze-food: %d ingredient(s), %d recipe(s)", len(ingredients), len(recipes))
    return AnalyzeFoodOut(ingredients=ingredients, recipes=recipes)


@router.post("/analyze-images", response_model=IngredientsOut)
async def analyze_images(images: Optional[List[UploadFile]] = File(None)):
    """
    Upload multipart (campo "images") -> só a lista de ingredientes
    """
    if not images:
        raise FitChefError(400, "Nenhuma imagem fornecida")

    urls: List[str] = []
    for f in images:
        if not f.content_type or not f.content_type.startswith("image/"):
            raise FitChefError(400, "Apenas arquivos de imagem são aceitos")
        data = await f.read()
        if not data:
            raise FitChefError(400, "Arquivo de imagem vazio")
        if len(data) > settings.MAX_IMAGE_BYTES:
            raise FitChefError(400, "Use apenas imagens menores que 10MB.")
        urls.append(to_data_url(data, f.content_type))

    try:
        async with openai_client(require_api_key(strict=False)) as client:
            data = await detect_ingredients(client, urls, detailed=False)
    except FitChefError:
        raise
    except openai.APIStatusError as e:
        log.error("OpenAI error: status=%s body=%s", e.status_code, e.body)
        raise FitChefError(500, "Erro ao analisar imagens. Verifique sua chave da OpenAI.") from e
    except Exception as e:
        log.exception("analyze-images failed: %s", e)
        raise FitChefError(500, "Erro interno ao processar imagens") from e

    ingredients = extract_ingredient_names(data)
    if ingredients is None:
        raise FitChefError(500, "Erro interno ao processar imagens")

    return IngredientsOut(ingredients=ingredients)


@router.post("/generate-recipes", response_model=RecipesOut)
async def generate_recipes_from_ingredients(payload: GenerateRecipesIn):
    """
    Lista de ingredientes -> 3 receitas simples
    """
    ingredients = unique_names(payload.ingredients)
    if not ingredients:
        raise FitChefError(400, "Nenhum ingrediente fornecido")

    try:
        async with openai_client(require_api_key(strict=False)) as client:
            raw = await generate_recipes(client, ingredients, healthy=False)
    except FitChefError:
        raise
    except openai.APIStatusError as e:
        log.error("OpenAI error: status=%s body=%s", e.status_code, e.body)
        raise FitChefError(500, "Erro ao gerar receitas. Verifique sua chave da OpenAI.") from e
    except Exception as e:
        log.exception("generate-recipes failed: %s", e)
        raise FitChefError(500, "Erro interno ao processar receitas") from e

    recipes = filter_valid_recipes(raw.get("recipes") if isinstance(raw, dict) else None)
    if not recipes:
        raise FitChefError(500, "Erro interno ao processar receitas")

    return RecipesOut(recipes=recipes)
