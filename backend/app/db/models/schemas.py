# app/db/models/schemas.py
# Modelos Pydantic
# RecipeFields: campos comuns da receita (aceita camelCase do modelo e snake_case do banco)
# GeneratedRecipe: receita vinda do LLM -> resposta em camelCase
# RecipeOut: documento salvo na coleção "recipes"
from __future__ import annotations
import re
from datetime import datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_NUM_RE = re.compile(r"\d+(?:[.,]\d+)?")
# "1.200" -> 1200: ponto seguido de exatamente 3 dígitos é separador de milhar
_THOUSANDS_RE = re.compile(r"(?<=\d)\.(?=\d{3}(?!\d))")


def _clean_lines(v: Any) -> Any:
    # listas do modelo às vezes trazem "" ou null no meio
    if not isinstance(v, list):
        return v
    out = []
    for x in v:
        if x is None or isinstance(x, (dict, list)):
            continue
        s = str(x).strip()
        if s:
            out.append(s)
    return out


def _to_int(v: Any) -> Optional[int]:
    # "350 kcal" -> 350, "1.200 kcal" -> 1200, 2.5 -> 2, lixo -> None
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return int(v)
    if isinstance(v, str):
        m = _NUM_RE.search(_THOUSANDS_RE.sub("", v))
        if m:
            return int(float(m.group(0).replace(",", ".")))
    return None


class NutritionInfo(BaseModel):
    protein: Optional[str] = None
    carbs: Optional[str] = None
    fiber: Optional[str] = None
    fat: Optional[str] = None

    @field_validator("protein", "carbs", "fiber", "fat", mode="before")
    @classmethod
    def _v_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)


class RecipeFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    type: str = Field(min_length=1)                      # "doce" | "salgado"
    difficulty: Optional[str] = None                     # "fácil" | "médio" | "difícil"
    ingredients: List[str] = Field(min_length=1)
    instructions: List[str] = Field(min_length=1)
    prep_time: str = Field(default="", validation_alias=AliasChoices("prep_time", "prepTime"))
    calories: Optional[int] = None
    servings: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    nutrition_info: Optional[NutritionInfo] = Field(
        default=None, validation_alias=AliasChoices("nutrition_info", "nutritionInfo")
    )

    @field_validator("name", mode="before")
    @classmethod
    def _v_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("type", "difficulty", mode="before")
    @classmethod
    def _v_label(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("ingredients", "instructions", "tags", mode="before")
    @classmethod
    def _v_lines(cls, v):
        if v is None:
            return []
        return _clean_lines(v)

    @field_validator("prep_time", mode="before")
    @classmethod
    def _v_prep_time(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("calories", "servings", mode="before")
    @classmethod
    def _v_int(cls, v):
        return _to_int(v)


class GeneratedRecipe(RecipeFields):
    # resposta pro front segue as chaves do prompt (prepTime/nutritionInfo)
    prep_time: str = Field(
        default="",
        validation_alias=AliasChoices("prepTime", "prep_time"),
        serialization_alias="prepTime",
    )
    nutrition_info: Optional[NutritionInfo] = Field(
        default=None,
        validation_alias=AliasChoices("nutritionInfo", "nutrition_info"),
        serialization_alias="nutritionInfo",
    )


class SaveRecipeIn(RecipeFields):
    images: List[str] = Field(default_factory=list)      # data URLs das fotos originais
    detected_ingredients: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("detected_ingredients", "detectedIngredients"),
    )

    @field_validator("images", "detected_ingredients", mode="before")
    @classmethod
    def _v_lists(cls, v):
        if v is None:
            return []
        return _clean_lines(v)


class RecipeOut(SaveRecipeIn):
    id: str
    user_id: str
    created_at: datetime


# entradas das rotas de análise
class AnalyzeFoodIn(BaseModel):
    images: List[str] = Field(default_factory=list)


class GenerateRecipesIn(BaseModel):
    ingredients: List[str] = Field(default_factory=list)


class ApiKeyIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_key: Optional[str] = Field(default=None, alias="apiKey")


# saídas
class AnalyzeFoodOut(BaseModel):
    ingredients: List[str]
    recipes: List[GeneratedRecipe]


class IngredientsOut(BaseModel):
    ingredients: List[str]


class RecipesOut(BaseModel):
    recipes: List[GeneratedRecipe]


class KeyStatusOut(BaseModel):
    configured: bool


class KeyTestOut(BaseModel):
    success: bool
    message: str


class ShareOut(BaseModel):
    title: str
    text: str
    whatsapp_text: str
    whatsapp_url: str


class FavoriteOut(BaseModel):
    recipe_id: str
    favorite: bool


class FavoritesOut(BaseModel):
    recipe_ids: List[str] = Field(default_factory=list)


class MessageOut(BaseModel):
    success: bool
    message: str
