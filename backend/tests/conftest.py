import copy
import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import httpx
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.config import settings
from app.db.init import get_db
from app.main import app
from app.services import openai_client as openai_client_module

TEST_KEY = "sk-test-0123456789abcdefghij"
PNG_URL = "data:image/png;base64,iVBORw0KGgo="


# ---------------------------------------------------------------------------
# MongoDB em memória (subconjunto da API do motor usado pelas rotas)
# ---------------------------------------------------------------------------

def _matches(doc: Dict[str, Any], flt: Dict[str, Any]) -> bool:
    return all(doc.get(k) == v for k, v in flt.items())


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]], error: Optional[Exception] = None):
        self._docs = docs
        self._error = error

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def skip(self, n: int) -> "FakeCursor":
        self._docs = self._docs[n:]
        return self

    def limit(self, n: int) -> "FakeCursor":
        if n:
            self._docs = self._docs[:n]
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        if self._error is not None:
            raise self._error
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    def __init__(self):
        self.docs: List[Dict[str, Any]] = []
        self.indexes: List[Any] = []
        # setado -> toda operação levanta (ex.: PyMongoError)
        self.error: Optional[Exception] = None

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    async def insert_one(self, doc):
        self._check()
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def find_one(self, flt):
        self._check()
        for d in self.docs:
            if _matches(d, flt):
                return copy.deepcopy(d)
        return None

    def find(self, flt, projection=None):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, flt)], self.error)

    async def delete_one(self, flt):
        self._check()
        for i, d in enumerate(self.docs):
            if _matches(d, flt):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, flt):
        self._check()
        before = len(self.docs)
        self.docs = [d for d in self.docs if not _matches(d, flt)]
        return SimpleNamespace(deleted_count=before - len(self.docs))

    async def update_one(self, flt, update, upsert=False):
        self._check()
        for d in self.docs:
            if _matches(d, flt):
                d.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, upserted_id=None)
        if not upsert:
            return SimpleNamespace(matched_count=0, upserted_id=None)
        doc = dict(flt, **update.get("$set", {}), **update.get("$setOnInsert", {}))
        res = await self.insert_one(doc)
        return SimpleNamespace(matched_count=0, upserted_id=res.inserted_id)

    async def create_index(self, keys, **kwargs):
        self._check()
        self.indexes.append((keys, kwargs))
        return "idx"


class FakeDB:
    def __init__(self):
        self._cols: Dict[str, FakeCollection] = {}
        self.error: Optional[Exception] = None

    def __getitem__(self, name: str) -> FakeCollection:
        col = self._cols.setdefault(name, FakeCollection())
        col.error = self.error
        return col

    async def command(self, name: str):
        if self.error is not None:
            raise self.error
        return {"ok": 1.0}


# ---------------------------------------------------------------------------
# OpenAI roteirizado
# ---------------------------------------------------------------------------

class FakeOpenAI:
    """Devolve `replies` em ordem; se `error` estiver setado, levanta em toda chamada."""

    def __init__(self, replies=(), error: Optional[Exception] = None):
        self.replies = [r if isinstance(r, str) else json.dumps(r, ensure_ascii=False) for r in replies]
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.init_kwargs: Dict[str, Any] = {}
        self.closed = False
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        self.models = SimpleNamespace(list=self._list)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True

    async def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        content = self.replies.pop(0)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])

    async def _list(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[])


def openai_status_error(cls, status: int, code: Optional[str] = None):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status, request=request)
    body = {"message": "boom", "code": code} if code else None
    return cls("boom", response=response, body=body)


def recipe_dict(**overrides):
    base = {
        "name": "Omelete de Espinafre",
        "type": "salgado",
        "difficulty": "fácil",
        "ingredients": ["2 ovos", "1 xícara de espinafre"],
        "instructions": ["Bata os ovos", "Refogue o espinafre", "Junte tudo e doure"],
        "prepTime": "15 min",
        "calories": 220,
        "servings": 1,
        "tags": ["saudável", "proteico"],
        "nutritionInfo": {"protein": "14g", "carbs": "3g", "fiber": "2g", "fat": "15g"},
    }
    base.update(overrides)
    return base


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", TEST_KEY)
    return TEST_KEY


@pytest.fixture
def fake_openai(monkeypatch):
    """Instala um FakeOpenAI no lugar do AsyncOpenAI: fake_openai(replies=[...], error=...)"""

    def install(replies=(), error=None) -> FakeOpenAI:
        fake = FakeOpenAI(replies, error)

        def factory(**kwargs):
            fake.init_kwargs = kwargs
            return fake

        monkeypatch.setattr(openai_client_module, "AsyncOpenAI", factory)
        return fake

    return install


@pytest.fixture
def db():
    return FakeDB()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
