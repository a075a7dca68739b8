# app/services/share.py
# Texto de compartilhamento da receita (copiar/colar ou WhatsApp)

from __future__ import annotations
from urllib.parse import quote

from app.db.models.schemas import RecipeFields

WHATSAPP_URL = "https://wa.me/?text="
FOOTER = "✨ Receita saudável gerada por FitChef"

def _na(v) -> str:
    return "N/A" if v in (None, "") else str(v)

def _bold(s: str, on: bool) -> str:
    return f"*{s}*" if on else s

def share_text(recipe: RecipeFields, whatsapp: bool = False) -> str:
    """
    Receita -> texto do card de compartilhamento.
    whatsapp=True marca título/seções com *negrito*.
    """
    lines = [f"🥗 {_bold(recipe.name, whatsapp)}", ""]

    lines.append(f"📋 {_bold('Ingredientes:', whatsapp)}")
    lines.extend(f"• {i}" for i in recipe.ingredients)
    lines.append("")

    lines.append(f"👨‍🍳 {_bold('Modo de Preparo:', whatsapp)}")
    lines.extend(f"{n}. {step}" for n, step in enumerate(recipe.instructions, start=1))
    lines.append("")

    lines.append(
        f"⏱️ Tempo: {_na(recipe.prep_time)} | 🔥 {_na(recipe.calories)} kcal"
        f" | 🍽️ {_na(recipe.servings)} porções"
    )

    info = recipe.nutrition_info
    if info is not None:
        lines.append("")
        lines.append(f"📊 {_bold('Informações Nutricionais', whatsapp)} (por porção):")
        lines.append(f"• Proteínas: {_na(info.protein)}")
        lines.append(f"• Carboidratos: {_na(info.carbs)}")
        lines.append(f"• Fibras: {_na(info.fiber)}")
        lines.append(f"• Gorduras: {_na(info.fat)}")

    lines.append("")
    lines.append(FOOTER)
    return "\n".join(lines)

def whatsapp_url(text: str) -> str:
    # mesmo conjunto de caracteres livres do encodeURIComponent
    return WHATSAPP_URL + quote(text, safe="-_.!~*'()")
