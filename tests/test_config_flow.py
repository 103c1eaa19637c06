from custom_components.recipe_importer.config_flow import _build_schema, _clean_user_input
from custom_components.recipe_importer.const import CONF_CONVERT_UNITS, CONF_TODO_ENTITY


def test_clean_user_input_blanks_empty_entity():
    assert _clean_user_input({CONF_TODO_ENTITY: "  "}) == {CONF_TODO_ENTITY: None}
    assert _clean_user_input({CONF_TODO_ENTITY: "todo.shopping"}) == {
        CONF_TODO_ENTITY: "todo.shopping"}
    assert _clean_user_input({CONF_CONVERT_UNITS: False}) == {CONF_CONVERT_UNITS: False}


def test_schema_defaults():
    assert _build_schema(None, True)({}) == {CONF_CONVERT_UNITS: True}
    assert _build_schema("todo.shopping", False)({}) == {
        CONF_TODO_ENTITY: "todo.shopping",
        CONF_CONVERT_UNITS: False,
    }
