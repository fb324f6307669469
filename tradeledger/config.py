"""Configuration loading for TradeLedger.

Settings live in a TOML file, by default ``~/.config/tradeledger/config.toml``::

    [storage]
    db_path = "~/.config/tradeledger/ledger.db"
    namespace = "default"

    [ledger]
    daily_trade_limit = 4

    [display]
    currency_symbol = "$"
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradeledger"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "ledger.db"
CONFIG_ENV_VAR = "TRADELEDGER_CONFIG"


class AppConfig(BaseModel):
    """Runtime settings."""

    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite database file")
    namespace: str = Field(default="default", min_length=1, description="Storage partition")
    daily_trade_limit: int = Field(default=4, ge=1, le=4, description="Maximum trades per day")
    currency_symbol: str = Field(default="$", description="Currency symbol for display")

    model_config = {"frozen": True}


def config_path() -> Path:
    """Get the configuration file path, honouring TRADELEDGER_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration, falling back to defaults.

    Args:
        path: Config file to read. Defaults to ``config_path()``.

    Returns:
        AppConfig built from the file. A missing or unreadable file gives
        defaults; invalid values fall back to their defaults individually.
    """
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = toml.load(path)
    except toml.TomlDecodeError as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return AppConfig()

    storage = raw.get("storage", {})
    values = {
        "namespace": storage.get("namespace"),
        "daily_trade_limit": raw.get("ledger", {}).get("daily_trade_limit"),
        "currency_symbol": raw.get("display", {}).get("currency_symbol"),
    }
    if storage.get("db_path"):
        values["db_path"] = Path(storage["db_path"]).expanduser()
    values = {k: v for k, v in values.items() if v is not None}
    try:
        return AppConfig(**values)
    except PydanticValidationError as exc:
        invalid = {str(err["loc"][0]) for err in exc.errors()}
        logger.warning("Ignoring invalid config values in %s: %s", path, ", ".join(sorted(invalid)))
        return AppConfig(**{k: v for k, v in values.items() if k not in invalid})
