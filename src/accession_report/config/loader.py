from pathlib import Path
from typing import Any, Dict

import yaml

from ..report.enrichers import DERIVED_FIELDS

DEFAULT_CONFIG_PATH = Path("accession_report.config.yaml")
DEFAULT_SQLITE_PATH = "archivesspace.db"

ALLOWED_DERIVED_FIELD_MODES = ("subquery", "stored_function")

BASE_REPORT_DEFAULTS: Dict[str, Any] = {
    "repo_id": None,
    "derived_fields": "subquery",
    "stored_functions": {},
}


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load the report configuration from YAML.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the file does not hold a mapping
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    return config


def get_database_url(config: Dict[str, Any]) -> str:
    """
    Resolve the store location from the 'storage' section.

    'database_url' (any SQLAlchemy URL) wins over 'sqlite_path'.
    """
    storage = config.get("storage") or {}
    if not isinstance(storage, dict):
        raise ValueError("Config 'storage' must be a dictionary if provided")
    url = storage.get("database_url")
    if url:
        return str(url)
    return f"sqlite:///{storage.get('sqlite_path', DEFAULT_SQLITE_PATH)}"


def get_report_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize the 'report' section with built-in defaults.

    Returns:
        Dict with repo_id (int or None), derived_fields and stored_functions

    Raises:
        ValueError: If the section or one of its fields is malformed
    """
    report = config.get("report") or {}
    if not isinstance(report, dict):
        raise ValueError("Config 'report' must be a dictionary if provided")

    settings = {**BASE_REPORT_DEFAULTS, **report}

    if settings["repo_id"] is not None:
        try:
            settings["repo_id"] = int(settings["repo_id"])
        except (TypeError, ValueError):
            raise ValueError(f"Config 'report.repo_id' must be an integer, got {settings['repo_id']!r}")

    if settings["derived_fields"] not in ALLOWED_DERIVED_FIELD_MODES:
        raise ValueError(
            f"Config 'report.derived_fields' must be one of {ALLOWED_DERIVED_FIELD_MODES}, "
            f"got {settings['derived_fields']!r}"
        )

    functions = settings["stored_functions"] or {}
    if not isinstance(functions, dict):
        raise ValueError("Config 'report.stored_functions' must be a dictionary if provided")
    for field in functions:
        if field not in DERIVED_FIELDS:
            raise ValueError(f"Config 'report.stored_functions' has unknown field: {field}")
    settings["stored_functions"] = {field: str(name) for field, name in functions.items()}

    return settings
