import pytest

from custom_components.recipe_importer.models.recipe import ParsedIngredient
from custom_components.recipe_importer.services.ingredient_formatter import (
    format_ingredient,
    format_ingredients_for_todo,
    scale_ingredients,
)


def _ingredient(name, amount=0.0, unit="", order_index=0):
    return ParsedIngredient(name=name, amount=amount, unit=unit, order_index=order_index)


def test_formats_converted_amount_after_name():
    milk = _ingredient("Whole Milk", 14, "fl oz")

    assert format_ingredient(milk, convert_units=True) == "Whole Milk 414 ml"


def test_keeps_original_unit_without_conversion():
    milk = _ingredient("Whole Milk", 14, "fl oz")

    assert format_ingredient(milk, convert_units=False) == "Whole Milk 14 fl oz"


@pytest.mark.parametrize(
    ("ingredient", "expected"),
    [
        (_ingredient("Salt"), "Salt"),
        (_ingredient("Cauliflower", 1), "Cauliflower 1"),
        (_ingredient("Garlic", 2, "cloves"), "Garlic 2 cloves"),
        (_ingredient("Flour", 250, "g"), "Flour 250 g"),
        (_ingredient("Butter", 2.75, "oz"), "Butter 78 g"),
        (_ingredient("Olive Oil", 0.5, "tsp"), "Olive Oil 2.5 ml"),
        (_ingredient("Chopped Tomatoes", 2, "x 400g cans"), "Chopped Tomatoes 800 g"),
    ],
)
def test_format_ingredient(ingredient, expected):
    assert format_ingredient(ingredient, convert_units=True) == expected


def test_scale_ingredients_keeps_order():
    ingredients = [
        _ingredient("Rice", 200, "g", 0),
        _ingredient("Salt", 0, "", 1),
    ]

    scaled = scale_ingredients(ingredients, 4, 6)

    assert [i.amount for i in scaled] == [300, 0]
    assert [i.order_index for i in scaled] == [0, 1]
    assert ingredients[0].amount == 200


@pytest.mark.parametrize(("original", "target"), [(None, 2), (0, 2), (4, 0)])
def test_scale_ingredients_rejects_bad_servings(original, target):
    ingredients = [_ingredient("Rice", 200, "g")]

    assert scale_ingredients(ingredients, original, target) is ingredients


def test_format_ingredients_for_todo_skips_blank_names():
    ingredients = [
        _ingredient("  ", 1, "cup", 0),
        _ingredient("Sugar", 1, "cup", 1),
    ]

    assert format_ingredients_for_todo(ingredients, convert_units=True) == ["Sugar 237 ml"]
