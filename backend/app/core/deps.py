# Dependências comuns: identificação do usuário anônimo
# - front com id próprio (localStorage) manda X-User-Id
# - sem header: cookie anon_id (emitido na primeira visita)
import re
import uuid
from typing import Optional

from fastapi import Header, Request, Response

COOKIE = "anon_id"
MAX_AGE = 60 * 60 * 24 * 365 * 2  # 2 anos

_USER_ID_RE = re.compile(r"^[A-Za-z0-9_\-]{8,64}$")

def get_user_id(
    request: Request,
    response: Response,
    x_user_id: Optional[str] = Header(default=None),
) -> str:
    if x_user_id and _USER_ID_RE.match(x_user_id):
        return x_user_id

    v = request.cookies.get(COOKIE)
    if not v:
        v = uuid.uuid4().hex
        response.set_cookie(COOKIE, v, max_age=MAX_AGE, httponly=True, samesite="lax")
    return v
