# app/services/utils.py
# Limpeza da saída do modelo / utilitários de imagem
# - o modelo às vezes embrulha o JSON em ```json ... ``` mesmo pedindo "sem markdown"
# - parse nunca levanta exceção: devolve None e registra o texto bruto

from __future__ import annotations
import base64
import json
import logging
import re
from typing import Any, Iterable, List, Optional

log = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?", re.I)

def strip_code_fences(text: str) -> str:
    # remove todas as cercas markdown e espaços nas pontas
    return _FENCE_RE.sub("", (text or "").strip()).strip()

def safe_json_loads(text: Optional[str]) -> Optional[Any]:
    """
    Texto do modelo -> objeto JSON ou None.
    """
    clean = strip_code_fences(text or "")
    if not clean:
        log.warning("model returned empty content")
        return None
    try:
        return json.loads(clean)
    except json.JSONDecodeError as e:
        log.warning("model returned non-JSON content (%s); raw=%r", e, text)
        return None

def unique_names(items: Iterable[Any]) -> List[str]:
    # mantém só strings não vazias, sem duplicatas, na ordem em que apareceram
    seen = set()
    out: List[str] = []
    for it in items or []:
        if not isinstance(it, str):
            continue
        s = re.sub(r"\s+", " ", it).strip()
        if s and s not in seen:
            seen.add(s)
            out.append(s)
    return out

def to_data_url(data: bytes, content_type: Optional[str]) -> str:
    mime = content_type or "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
