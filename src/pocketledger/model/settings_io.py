from __future__ import annotations

"""
Settings I/O (YAML loading and saving).

Functions for reading and writing config/settings.yml.

Privacy
- All operations are local file I/O only
"""

from pathlib import Path

import yaml

from pocketledger.errors import StorageError
from pocketledger.model.settings import LedgerSettings


def load_settings(path: Path) -> LedgerSettings:
    """Load settings from YAML (safe loader).

    A missing file yields default settings. A file that exists but cannot be
    parsed or validated raises, so that typos are not silently ignored.

    Args:
        path: Path to settings.yml

    Returns:
        LedgerSettings instance

    Raises:
        StorageError: If the file is unreadable or not valid YAML
        pydantic.ValidationError: If values are out of range
    """
    if not path.exists():
        return LedgerSettings()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise StorageError(f"Cannot read settings from {path}: {e}") from e

    return LedgerSettings.model_validate(data)


def save_settings(path: Path, settings: LedgerSettings) -> None:
    """Save settings to a YAML file, creating parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)

    data = settings.model_dump(mode="json")

    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            data,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


__all__ = ["load_settings", "save_settings"]
