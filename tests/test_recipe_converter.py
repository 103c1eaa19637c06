import json

import recipe_converter

RECIPES = """Title: Lemon Cake
Ingredients:
8 oz Butter
====
Title: Lemon Cake
Ingredients:
1 cup Sugar
"""


def test_main_prints_json(tmp_path, capsys):
    source = tmp_path / "recipes.txt"
    source.write_text(RECIPES, encoding="utf-8")

    assert recipe_converter.main([str(source)]) == 0

    recipes = json.loads(capsys.readouterr().out)
    assert [recipe["category"] for recipe in recipes] == ["dessert", "dessert"]


def test_main_writes_one_file_per_recipe(tmp_path):
    source = tmp_path / "recipes.txt"
    source.write_text(RECIPES, encoding="utf-8")
    output_dir = tmp_path / "out"

    assert recipe_converter.main([str(source), "--output-dir", str(output_dir)]) == 0

    assert sorted(path.name for path in output_dir.iterdir()) == [
        "lemon_cake.json", "lemon_cake_2.json"]


def test_main_metric_summary(tmp_path, capsys):
    source = tmp_path / "recipes.txt"
    source.write_text(RECIPES, encoding="utf-8")

    recipe_converter.main([str(source), "--metric"])

    out = capsys.readouterr().out
    assert "Butter 227 g" in out
    assert "Sugar 237 ml" in out


def test_main_fails_without_recipes(tmp_path):
    source = tmp_path / "empty.txt"
    source.write_text("", encoding="utf-8")

    assert recipe_converter.main([str(source), str(tmp_path / "missing.txt")]) == 1


def test_safe_filename():
    assert recipe_converter.safe_filename("Mum's Best Pie!") == "mums_best_pie"
    assert recipe_converter.safe_filename("???") == "recipe"
