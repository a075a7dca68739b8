# Índices das coleções
# O startup chama ensure_indexes() uma vez com await.

from pymongo import ASCENDING, DESCENDING

from app.db.init import get_db

async def ensure_indexes():
    db = get_db()

    # receitas salvas: listagem por dono, mais novas primeiro
    await db["recipes"].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    # favoritos: um por (usuário, receita)
    await db["favorites"].create_index(
        [("user_id", ASCENDING), ("recipe_id", ASCENDING)], unique=True
    )
    await db["favorites"].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
