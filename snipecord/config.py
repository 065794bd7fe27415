"""
Configuration for the SnipeCord section sniper

Watch-list settings are read once from config.json:

    {
        "webhook": "https://discord.com/api/webhooks/...",
        "mention": "<@&1234>",
        "repeat_timeout": 60,
        "year": "2024",
        "term": "9",
        "campus": "NB",
        "level": "U",
        "indexes": ["01234", "05678"]
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import ConfigError
from .settings import DEFAULT_REPEAT_TIMEOUT, WEBHOOK_URL_OVERRIDE

logger = logging.getLogger(__name__)


# "0" winter, "1" spring, "7" summer, "9" fall
VALID_TERMS = {"0", "1", "7", "9"}
# New Brunswick, Newark, Camden
VALID_CAMPUSES = {"NB", "NK", "CM"}
# Undergraduate, graduate
VALID_LEVELS = {"U", "G"}

REQUIRED_KEYS = ("webhook", "year", "term", "campus", "level", "indexes")


def _as_str(data: Dict[str, Any], key: str) -> str:
    """Read a string field, accepting bare numbers (e.g. "year": 2024)."""
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}")
    value = str(value).strip()
    if not value:
        raise ConfigError(f"'{key}' must not be empty")
    return value


def _parse_indexes(raw: Any) -> List[str]:
    if not isinstance(raw, list) or not raw:
        raise ConfigError("'indexes' must be a non-empty list of registration indexes")

    indexes = []
    for item in raw:
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            raise ConfigError(f"Invalid index {item!r} in 'indexes'")
        index = str(item).strip()
        if not index:
            raise ConfigError("Empty index in 'indexes'")
        if index in indexes:
            logger.warning(f"Index {index} listed twice in config; tracking it once")
            continue
        indexes.append(index)
    return indexes


@dataclass
class Config:
    """All watch-list settings."""

    # Discord webhook URL
    webhook: str

    # Schedule of Classes query
    year: str
    term: str
    campus: str
    level: str

    # Five-digit registration indexes (found on SOC/CSP/WebReg)
    indexes: List[str] = field(default_factory=list)

    # Prepended to alerts to ping someone: "<@user id>" or "<@&role id>". An
    # empty string is kept as is and gives the same empty prefix as None.
    mention: Optional[str] = None

    # Ticks to wait before repeating an alert for a section that stays open.
    # Reset automatically when the section closes.
    repeat_timeout: int = DEFAULT_REPEAT_TIMEOUT

    @property
    def params(self) -> Dict[str, str]:
        """Query parameters shared by every SOC request."""
        return {
            "year": self.year,
            "term": self.term,
            "campus": self.campus,
            "level": self.level,
        }

    def __repr__(self) -> str:
        # Webhook URLs embed a token
        return (
            f"Config(webhook='***', mention={self.mention!r}, "
            f"repeat_timeout={self.repeat_timeout}, year={self.year!r}, "
            f"term={self.term!r}, campus={self.campus!r}, level={self.level!r}, "
            f"indexes={self.indexes!r})"
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """
        Build and validate a Config from parsed JSON.

        Raises:
            ConfigError: If a required key is missing or a value is invalid
        """
        if not isinstance(data, dict):
            raise ConfigError("Config must be a JSON object")

        missing = [
            key for key in REQUIRED_KEYS
            if key not in data and not (key == "webhook" and WEBHOOK_URL_OVERRIDE)
        ]
        if missing:
            raise ConfigError(f"Missing required config keys: {', '.join(missing)}")

        webhook = WEBHOOK_URL_OVERRIDE or _as_str(data, "webhook")

        term = _as_str(data, "term")
        if term not in VALID_TERMS:
            raise ConfigError(f"Invalid term {term!r} (expected one of {sorted(VALID_TERMS)})")

        campus = _as_str(data, "campus").upper()
        if campus not in VALID_CAMPUSES:
            raise ConfigError(f"Invalid campus {campus!r} (expected one of {sorted(VALID_CAMPUSES)})")

        level = _as_str(data, "level").upper()
        if level not in VALID_LEVELS:
            raise ConfigError(f"Invalid level {level!r} (expected one of {sorted(VALID_LEVELS)})")

        mention = data.get("mention")
        if mention is not None and not isinstance(mention, str):
            raise ConfigError("'mention' must be a string")

        repeat_timeout = data.get("repeat_timeout", DEFAULT_REPEAT_TIMEOUT)
        if isinstance(repeat_timeout, bool) or not isinstance(repeat_timeout, int) or repeat_timeout < 0:
            raise ConfigError("'repeat_timeout' must be a non-negative integer")

        return cls(
            webhook=webhook,
            year=_as_str(data, "year"),
            term=term,
            campus=campus,
            level=level,
            indexes=_parse_indexes(data["indexes"]),
            mention=mention,
            repeat_timeout=repeat_timeout,
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Config":
        """
        Read config.json from disk.

        Raises:
            ConfigError: If the file can't be read or parsed
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to read {path}: {e}")

        config = cls.from_dict(data)
        logger.info(f"Parsed config: {config!r}")
        return config
