# app/api/routes_favorites.py
# Favoritos: associação (usuário, receita)

from __future__ import annotations
from datetime import datetime
import logging

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from app.core.deps import get_user_id
from app.core.exceptions import DatabaseError, FitChefError
from app.db.init import get_db
from app.db.models.schemas import FavoriteOut, FavoritesOut

log = logging.getLogger(__name__)

router = APIRouter(prefix="/favorites", tags=["favorites"])


async def _add(db, user_id: str, recipe_id: str) -> None:
    # upsert: adicionar duas vezes não duplica
    await db["favorites"].update_one(
        {"user_id": user_id, "recipe_id": recipe_id},
        {"$setOnInsert": {"created_at": datetime.utcnow()}},
        upsert=True,
    )


@router.get("", response_model=FavoritesOut)
async def list_favorites(user_id: str = Depends(get_user_id), db=Depends(get_db)):
    """IDs das receitas favoritas do usuário"""
    try:
        cursor = db["favorites"].find({"user_id": user_id}, {"recipe_id": 1}).sort("created_at", -1)
        docs = await cursor.to_list(length=None)
    except PyMongoError as e:
        log.exception("favorite list failed: %s", e)
        raise DatabaseError("carregar favoritos") from e
    return FavoritesOut(recipe_ids=[d["recipe_id"] for d in docs])


@router.post("/{recipe_id}", response_model=FavoriteOut)
async def add_favorite(recipe_id: str, user_id: str = Depends(get_user_id), db=Depends(get_db)):
    try:
        await _add(db, user_id, recipe_id)
    except PyMongoError as e:
        log.exception("favorite insert failed: %s", e)
        raise DatabaseError("atualizar favorito") from e
    return FavoriteOut(recipe_id=recipe_id, favorite=True)


@router.delete("/{recipe_id}", response_model=FavoriteOut)
async def remove_favorite(recipe_id: str, user_id: str = Depends(get_user_id), db=Depends(get_db)):
    try:
        result = await db["favorites"].delete_one({"user_id": user_id, "recipe_id": recipe_id})
    except PyMongoError as e:
        log.exception("favorite delete failed: %s", e)
        raise DatabaseError("atualizar favorito") from e
    if result.deleted_count == 0:
        raise FitChefError(404, "Favorito não encontrado")
    return FavoriteOut(recipe_id=recipe_id, favorite=False)


@router.post("/{recipe_id}/toggle", response_model=FavoriteOut)
async def toggle_favorite(recipe_id: str, user_id: str = Depends(get_user_id), db=Depends(get_db)):
    """Favorito <-> não favorito (o botão de coração)"""
    try:
        result = await db["favorites"].delete_one({"user_id": user_id, "recipe_id": recipe_id})
        if result.deleted_count:
            return FavoriteOut(recipe_id=recipe_id, favorite=False)
        await _add(db, user_id, recipe_id)
    except PyMongoError as e:
        log.exception("favorite toggle failed: %s", e)
        raise DatabaseError("atualizar favorito") from e
    return FavoriteOut(recipe_id=recipe_id, favorite=True)
