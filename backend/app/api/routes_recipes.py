# app/api/routes_recipes.py
# Receitas salvas (por usuário anônimo) + compartilhamento

from __future__ import annotations
from typing import Any, Dict, List, Mapping
from datetime import datetime
import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, Query
from pymongo.errors import PyMongoError

from app.core.deps import get_user_id
from app.core.exceptions import DatabaseError, FitChefError
from app.db.init import get_db
from app.db.models.schemas import (
    GeneratedRecipe,
    MessageOut,
    RecipeFields,
    RecipeOut,
    SaveRecipeIn,
    ShareOut,
)
from app.services.share import share_text, whatsapp_url

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


def to_recipe_out(doc: Mapping[str, Any]) -> RecipeOut:
    # _id(ObjectId) -> id(str)
    d = dict(doc)
    d["id"] = str(d.pop("_id"))
    return RecipeOut.model_validate(d)


def _object_id(recipe_id: str) -> ObjectId:
    if not ObjectId.is_valid(recipe_id):
        raise FitChefError(400, f"'{recipe_id}' não é um id de receita válido.")
    return ObjectId(recipe_id)


def _share(recipe: RecipeFields) -> ShareOut:
    wa_text = share_text(recipe, whatsapp=True)
    return ShareOut(
        title=f"🥗 {recipe.name}",
        text=share_text(recipe),
        whatsapp_text=wa_text,
        whatsapp_url=whatsapp_url(wa_text),
    )


async def _find_owned(db, recipe_id: str, user_id: str) -> Dict[str, Any]:
    oid = _object_id(recipe_id)
    try:
        doc = await db["recipes"].find_one({"_id": oid, "user_id": user_id})
    except PyMongoError as e:
        log.exception("recipe lookup failed: %s", e)
        raise DatabaseError("buscar a receita") from e
    if not doc:
        raise FitChefError(404, "Receita não encontrada")
    return doc


@router.post("", response_model=RecipeOut, status_code=201)
async def save_recipe(
    payload: SaveRecipeIn,
    user_id: str = Depends(get_user_id),
    db=Depends(get_db),
):
    """Salva uma receita gerada (com fotos e ingredientes detectados)"""
    doc = payload.model_dump()
    doc["user_id"] = user_id
    doc["created_at"] = datetime.utcnow()

    try:
        result = await db["recipes"].insert_one(doc)
    except PyMongoError as e:
        log.exception("recipe insert failed: %s", e)
        raise DatabaseError("salvar a receita") from e

    doc["_id"] = result.inserted_id
    log.info("recipe saved: %s (user=%s)", result.inserted_id, user_id)
    return to_recipe_out(doc)


@router.get("", response_model=List[RecipeOut])
async def list_recipes(
    user_id: str = Depends(get_user_id),
    db=Depends(get_db),
    limit: int = Query(50, ge=1, le=100),
    skip: int = Query(0, ge=0),
):
    """Receitas do usuário, mais novas primeiro"""
    try:
        cursor = db["recipes"].find({"user_id": user_id}).sort("created_at", -1).skip(skip).limit(limit)
        docs = await cursor.to_list(length=limit)
    except PyMongoError as e:
        log.exception("recipe list failed: %s", e)
        raise DatabaseError("carregar receitas") from e
    return [to_recipe_out(d) for d in docs]


# rota estática antes de /{recipe_id}
@router.post("/share", response_model=ShareOut)
async def share_unsaved_recipe(payload: GeneratedRecipe):
    """Texto de compartilhamento para uma receita recém-gerada (não salva)"""
    return _share(payload)


@router.get("/{recipe_id}", response_model=RecipeOut)
async def get_recipe(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    db=Depends(get_db),
):
    return to_recipe_out(await _find_owned(db, recipe_id, user_id))


@router.get("/{recipe_id}/share", response_model=ShareOut)
async def share_recipe(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    db=Depends(get_db),
):
    return _share(to_recipe_out(await _find_owned(db, recipe_id, user_id)))


@router.delete("/{recipe_id}", response_model=MessageOut)
async def delete_recipe(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    db=Depends(get_db),
):
    """
    Exclui a receita do usuário e os favoritos que apontam para ela
    """
    oid = _object_id(recipe_id)
    try:
        result = await db["recipes"].delete_one({"_id": oid, "user_id": user_id})
        if result.deleted_count == 0:
            raise FitChefError(404, "Receita não encontrada")
        await db["favorites"].delete_many({"user_id": user_id, "recipe_id": recipe_id})
    except PyMongoError as e:
        log.exception("recipe delete failed: %s", e)
        raise DatabaseError("excluir a receita") from e

    log.info("recipe deleted: %s (user=%s)", recipe_id, user_id)
    return MessageOut(success=True, message="Receita excluída com sucesso!")
