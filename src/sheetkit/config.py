"""Configuration loader for sheetkit."""
import importlib.util
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "sheetkit.config.py"

# Upper-case config names -> StyleContext keyword arguments
CONFIG_KEYS = {
    "CLASS_NAME_PREFIX": "class_name_prefix",
    "DISABLE_STYLES_GENERATION": "disable_styles_generation",
    "IS_SSR": "is_ssr",
    "GENERATE_ID": "generate_id",
}


def load_config(path: Path | str | None = None) -> Dict[str, Any]:
    """
    Load configuration from a python file.

    If path is provided, loads from there.
    Otherwise, looks for sheetkit.config.py in the current working directory.

    Returns the StyleContext keyword arguments for the upper-case names the
    module defines.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        path = Path(path)

    if not path.exists():
        return {}

    try:
        spec = importlib.util.spec_from_file_location("sheetkit_config", path)
        if spec is None or spec.loader is None:
            return {}

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return {}

    config = {key: getattr(module, key) for key in dir(module) if key.isupper()}
    return {option: config[name] for name, option in CONFIG_KEYS.items() if name in config}
