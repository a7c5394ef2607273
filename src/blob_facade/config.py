"""Facade configuration helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .constants import (
    ACCOUNT_ENV_VAR,
    CONFIG_FILE,
    CONTAINER_ENV_VAR,
    DEFAULT_PAGE_SIZE,
    FACADE_DIR,
)


@dataclass
class FacadeConfig:
    """Defaults the CLI fills in when options are omitted."""

    account: str = ""
    container: str = ""
    max_page_size: int = DEFAULT_PAGE_SIZE
    compensate_move: bool = False


def load_facade_config(root: Optional[Path] = None) -> FacadeConfig:
    """Load configuration from .blob-facade/config.yaml, then apply env overrides.

    A missing, unreadable or malformed file (wrong value types included)
    yields defaults. BLOB_FACADE_ACCOUNT and BLOB_FACADE_CONTAINER win over
    the file when set.
    """

    cfg_path = (root or Path.cwd()) / FACADE_DIR / CONFIG_FILE
    config = FacadeConfig()
    if cfg_path.exists():
        try:
            config = _parse_config(yaml.safe_load(cfg_path.read_text()) or {})
        except Exception:
            config = FacadeConfig()

    if os.environ.get(ACCOUNT_ENV_VAR):
        config.account = os.environ[ACCOUNT_ENV_VAR]
    if os.environ.get(CONTAINER_ENV_VAR):
        config.container = os.environ[CONTAINER_ENV_VAR]
    return config


def _parse_config(data: dict) -> FacadeConfig:
    """Build a FacadeConfig from parsed YAML, rejecting mistyped values.

    Raises:
        ValueError: If the document or any value has the wrong type
    """
    if not isinstance(data, dict):
        raise ValueError("config.yaml must be a mapping")

    max_page_size = data.get("max_page_size", DEFAULT_PAGE_SIZE)
    # bool is an int subclass; `max_page_size: true` is not a page size
    if isinstance(max_page_size, bool) or not isinstance(max_page_size, int) or max_page_size < 1:
        raise ValueError(f"max_page_size must be a positive integer, got {max_page_size!r}")

    compensate_move = data.get("compensate_move", False)
    if not isinstance(compensate_move, bool):
        raise ValueError(f"compensate_move must be true or false, got {compensate_move!r}")

    return FacadeConfig(
        account=str(data.get("account", "") or ""),
        container=str(data.get("container", "") or ""),
        max_page_size=max_page_size,
        compensate_move=compensate_move,
    )
