import pytest

from app.services.recipe_llm import filter_valid_recipes, generate_recipes
from app.services.vision_openai import detect_ingredients, extract_ingredient_names

from conftest import FakeOpenAI, PNG_URL, recipe_dict


def test_filter_valid_recipes_drops_malformed_entries() -> None:
    raw = [
        recipe_dict(),
        recipe_dict(name=""),
        recipe_dict(type=None),
        recipe_dict(ingredients=[]),
        recipe_dict(instructions=["", "  "]),
        recipe_dict(ingredients="2 ovos"),
        "not a recipe",
        recipe_dict(name="Bolo de Banana", type="Doce"),
    ]
    got = filter_valid_recipes(raw)
    assert [r.name for r in got] == ["Omelete de Espinafre", "Bolo de Banana"]
    assert got[1].type == "doce"


def test_filter_valid_recipes_coerces_numbers_and_blank_lines() -> None:
    raw = [recipe_dict(calories="350 kcal", servings="2 porções", ingredients=["ovo", "", None])]
    (recipe,) = filter_valid_recipes(raw)
    assert recipe.calories == 350
    assert recipe.servings == 2
    assert recipe.ingredients == ["ovo"]


@pytest.mark.parametrize(
    "calories,expected",
    (("1.200 kcal", 1200), ("1.250.000", 1250000), ("2.5", 2), ("1,5 kcal", 1), ("cerca de 450", 450)),
)
def test_filter_valid_recipes_thousands_separator(calories, expected) -> None:
    (recipe,) = filter_valid_recipes([recipe_dict(calories=calories)])
    assert recipe.calories == expected


def test_filter_valid_recipes_serializes_camel_case() -> None:
    (recipe,) = filter_valid_recipes([recipe_dict()])
    dumped = recipe.model_dump(by_alias=True)
    assert dumped["prepTime"] == "15 min"
    assert dumped["nutritionInfo"]["protein"] == "14g"


@pytest.mark.parametrize("raw", (None, {}, "recipes", []))
def test_filter_valid_recipes_non_list(raw) -> None:
    assert filter_valid_recipes(raw) == []


@pytest.mark.parametrize(
    "data,expected",
    (
        ({"ingredients": ["tomate", "tomate", " alho "]}, ["tomate", "alho"]),
        ({"ingredients": [{"name": "frango"}, "arroz"]}, ["frango", "arroz"]),
        ({"ingredients": []}, []),
        ({"ingredients": "tomate"}, None),
        ({}, None),
        (None, None),
    ),
)
def test_extract_ingredient_names(data, expected) -> None:
    assert extract_ingredient_names(data) == expected


@pytest.mark.asyncio
async def test_detect_ingredients_detailed_request_shape() -> None:
    fake = FakeOpenAI(['```json\n{"ingredients": ["tomate"]}\n```'])
    got = await detect_ingredients(fake, [PNG_URL, PNG_URL], detailed=True)

    assert got == {"ingredients": ["tomate"]}
    (call,) = fake.calls
    assert call["model"] == "gpt-4o"
    assert call["max_tokens"] == 1500
    assert call["temperature"] == 0.3
    (message,) = call["messages"]
    parts = message["content"]
    assert parts[0]["type"] == "text"
    assert [p["image_url"] for p in parts[1:]] == [{"url": PNG_URL, "detail": "high"}] * 2


@pytest.mark.asyncio
async def test_detect_ingredients_simple_uses_system_prompt() -> None:
    fake = FakeOpenAI(["nada reconhecível"])
    got = await detect_ingredients(fake, [PNG_URL], detailed=False)

    assert got is None
    call = fake.calls[0]
    assert call["max_tokens"] == 1000
    assert [m["role"] for m in call["messages"]] == ["system", "user"]
    assert call["messages"][1]["content"][1]["image_url"] == {"url": PNG_URL}


@pytest.mark.asyncio
async def test_generate_recipes_healthy_prompt() -> None:
    fake = FakeOpenAI([{"recipes": [recipe_dict()]}])
    got = await generate_recipes(fake, ["ovo", "espinafre"], healthy=True)

    assert got["recipes"][0]["name"] == "Omelete de Espinafre"
    call = fake.calls[0]
    assert call["max_tokens"] == 4500
    assert call["temperature"] == 0.8
    user = call["messages"][1]["content"]
    assert "ovo, espinafre" in user
    assert "Crie 4 receitas" in user
    assert '"nutritionInfo": {' in user


@pytest.mark.asyncio
async def test_generate_recipes_simple_prompt() -> None:
    fake = FakeOpenAI([{"recipes": []}])
    await generate_recipes(fake, ["batata"], healthy=False)

    call = fake.calls[0]
    assert call["max_tokens"] == 2000
    assert "crie 3 receitas" in call["messages"][1]["content"]
