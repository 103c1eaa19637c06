from custom_components.recipe_importer.parsers.splitter import split_recipes

TWO_RECIPES = """Title: Tomato Soup
Ingredients:
- 2 cups stock

Title: Lemon Cake
Ingredients:
- 200 g flour
"""

DELIMITED = """Title: Tomato Soup
Ingredients:
- 2 cups stock
====
Title: Lemon Cake
Ingredients:
- 200 g flour
"""


def test_delimiter_splits_into_two_chunks():
    chunks = split_recipes(DELIMITED)

    assert len(chunks) == 2
    assert chunks[0].startswith("Title: Tomato Soup")
    assert chunks[1].startswith("Title: Lemon Cake")


def test_repeated_title_lines_split_without_delimiter():
    chunks = split_recipes(TWO_RECIPES)

    assert len(chunks) == 2
    assert chunks[1].startswith("Title: Lemon Cake")


def test_plain_single_recipe_is_one_chunk():
    text = "Pancakes\nIngredients:\n2 eggs\n1 cup milk\nMethod:\nWhisk and fry."

    assert split_recipes(text) == [text]


def test_single_title_line_does_not_split():
    text = "Title: Stew\nThe Title: of this stew is a secret\nIngredients:\n1 lb beef"

    assert len(split_recipes(text)) == 1


def test_title_matching_is_case_insensitive():
    chunks = split_recipes("title: One\n- a\nTITLE: Two\n- b")

    assert len(chunks) == 2
    assert chunks[1].startswith("TITLE: Two")


def test_delimiter_wins_over_title_lines():
    text = "Title: A\nTitle: B\n=====\nTitle: C"

    assert split_recipes(text) == ["Title: A\nTitle: B", "Title: C"]


def test_windows_line_endings_are_normalized():
    chunks = split_recipes("Title: A\r\n===\r\nTitle: B\rServings: 2")

    assert chunks == ["Title: A", "Title: B\nServings: 2"]


def test_blank_chunks_are_dropped():
    text = "====\n   \n====\nTitle: Only One\n====\n"

    assert split_recipes(text) == ["Title: Only One"]


def test_inline_equals_signs_are_not_delimiters():
    text = "Title: Maths Cake\n1 + 1 === 2\nIngredients:\n1 egg"

    assert len(split_recipes(text)) == 1


def test_empty_input_yields_no_chunks():
    assert split_recipes("") == []
    assert split_recipes("\n\n  \n") == []
