from custom_components.recipe_importer.models.recipe import ParsedRecipe
from custom_components.recipe_importer.services.recipe_service import (
    fold_extras_into_notes,
    parse_recipe_text,
    read_recipe_file,
    recipe_to_dict,
)

RECIPE_TEXT = """Title: Pea Soup
Time: 30 mins
Image: https://example.com/pea.jpg
Ingredients:
- 1 lb Frozen Peas
Notes:
Add mint.
"""


def test_fold_extras_appends_markers():
    recipe = ParsedRecipe(
        title="Pea Soup",
        notes="Add mint.\n",
        image_url="https://example.com/pea.jpg",
        cooking_time="30 mins",
    )

    assert fold_extras_into_notes(recipe) == (
        "Add mint.\n"
        "\n[IMAGE_URL: https://example.com/pea.jpg]"
        "\n[COOKING_TIME: 30 mins]"
    )


def test_fold_extras_without_extras_keeps_notes():
    assert fold_extras_into_notes(ParsedRecipe(title="Plain", notes="x")) == "x"


def test_recipe_to_dict_is_json_ready():
    data = recipe_to_dict(ParsedRecipe(title="Toast"))

    assert data["title"] == "Toast"
    assert data["category"] == "main"
    assert data["ingredients"] == []


def test_parse_recipe_text_folds_extras():
    recipes = parse_recipe_text(RECIPE_TEXT, fold_extras=True)

    assert len(recipes) == 1
    recipe = recipes[0]
    assert recipe["image_url"] is None
    assert recipe["cooking_time"] is None
    assert "[IMAGE_URL: https://example.com/pea.jpg]" in recipe["notes"]
    assert "[COOKING_TIME: 30 mins]" in recipe["notes"]
    assert recipe["ingredients"][0] == {
        "name": "Frozen Peas",
        "amount": 1.0,
        "unit": "lb",
        "order_index": 0,
    }


def test_parse_recipe_text_keeps_extras_by_default():
    recipe = parse_recipe_text(RECIPE_TEXT)[0]

    assert recipe["image_url"] == "https://example.com/pea.jpg"
    assert recipe["cooking_time"] == "30 mins"
    assert recipe["notes"] == "Add mint.\n"


def test_parse_recipe_text_without_titles_returns_empty():
    assert parse_recipe_text("") == []
    assert parse_recipe_text("- 1 cup of: nothing") == []


def test_read_recipe_file_replaces_bad_bytes(tmp_path):
    path = tmp_path / "recipes.txt"
    path.write_bytes(b"Title: Caf\xe9\nIngredients:\n2 cups Milk\n")

    text = read_recipe_file(path)

    assert text.startswith("Title: Caf�")
    assert parse_recipe_text(text)[0]["ingredients"][0]["unit"] == "cups"
