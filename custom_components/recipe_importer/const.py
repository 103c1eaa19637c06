"""Constants for the Recipe Importer integration."""

DOMAIN = "recipe_importer"

# Configuration and option keys
CONF_TODO_ENTITY = "default_todo_entity"
CONF_CONVERT_UNITS = "convert_to_metric"

# Default values
DEFAULT_CONVERT_UNITS = True

# Service names
SERVICE_PARSE = "parse"
SERVICE_ADD_TO_LIST = "add_to_list"
SERVICE_PARSE_TO_LIST = "parse_to_list"
SERVICE_CONVERT = "convert"

# Event names
EVENT_RECIPES_PARSED = "recipe_importer_recipes_parsed"
EVENT_PARSE_FAILED = "recipe_importer_parse_failed"

# Service data keys
DATA_TEXT = "text"
DATA_FILE_PATH = "file_path"
DATA_FOLD_EXTRAS = "fold_extras"
DATA_RECIPE = "recipe"
DATA_RECIPES = "recipes"
DATA_COUNT = "count"
DATA_ERROR = "error"
DATA_TODO_ENTITY = "todo_entity"
DATA_TARGET_SERVINGS = "target_servings"
DATA_AMOUNT = "amount"
DATA_UNIT = "unit"
