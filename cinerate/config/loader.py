"""Profile-based configuration loader for CineRate sessions."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_COMMENT_MAX_LENGTH = 100
DEFAULT_SCROLL_THRESHOLD = 3
DEFAULT_VIEWPORT_ROWS = 3
DEFAULT_PROFILE_DICT: dict[str, Any] = {
    "environment": DEFAULT_ENVIRONMENT,
    "rules": {
        "comment_max_length": DEFAULT_COMMENT_MAX_LENGTH,
    },
    "presentation": {
        "scroll_threshold": DEFAULT_SCROLL_THRESHOLD,
        "viewport_rows": DEFAULT_VIEWPORT_ROWS,
    },
    "logging": {"level": "WARNING"},
}
CONFIG_PROFILE_ENV = "CINERATE_CONFIG_PROFILE"
CONFIG_DIR_ENV = "CINERATE_CONFIG_DIR"
DEFAULT_PROFILE = "dev"
DEFAULT_CONFIG_ROOT = Path(__file__).resolve().parents[2] / "config" / "profiles"
CONFIG_EXTENSIONS = (".yaml", ".yml")


@dataclass
class EntryRulesConfig:
    comment_max_length: int = DEFAULT_COMMENT_MAX_LENGTH


@dataclass
class PresentationConfig:
    scroll_threshold: int = DEFAULT_SCROLL_THRESHOLD
    viewport_rows: int = DEFAULT_VIEWPORT_ROWS


@dataclass
class Settings:
    environment: str = DEFAULT_ENVIRONMENT
    rules: EntryRulesConfig = field(default_factory=EntryRulesConfig)
    presentation: PresentationConfig = field(default_factory=PresentationConfig)
    logging: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict)


def load_settings(
    profile: str | None = None, config_dir: str | Path | None = None
) -> Settings:
    """Load settings from the requested profile or fall back to defaults."""

    profile_name = profile or os.getenv(CONFIG_PROFILE_ENV, DEFAULT_PROFILE)
    config_root = Path(
        config_dir or os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_ROOT)
    ).expanduser()
    config_data = _load_profile_dict(profile_name, config_root)
    if not config_data:
        config_data = copy.deepcopy(DEFAULT_PROFILE_DICT)

    return Settings(
        environment=str(config_data.get("environment", DEFAULT_ENVIRONMENT)),
        rules=_build_rules_config(config_data.get("rules")),
        presentation=_build_presentation_config(config_data.get("presentation")),
        logging=dict(config_data.get("logging") or {}),
        raw=config_data,
    )


def _load_profile_dict(profile_name: str, config_root: Path) -> dict[str, Any]:
    """Load the YAML profile if available, otherwise return an empty dict."""

    if not config_root.exists():
        return {}

    for extension in CONFIG_EXTENSIONS:
        candidate = config_root / f"{profile_name}{extension}"
        if not candidate.exists():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise RuntimeError(
                f"Failed to parse config profile {candidate}: {exc}"
            ) from exc
        if not isinstance(loaded, dict):
            raise RuntimeError(
                f"Config profile {candidate} must be a mapping at the root"
            )
        return loaded

    return {}


def _build_rules_config(rules_cfg: dict[str, Any] | None) -> EntryRulesConfig:
    rules_cfg = rules_cfg or {}
    rules = EntryRulesConfig(
        comment_max_length=int(
            rules_cfg.get("comment_max_length", DEFAULT_COMMENT_MAX_LENGTH)
        ),
    )
    if rules.comment_max_length < 0:
        raise RuntimeError("rules.comment_max_length must be >= 0")
    return rules


def _build_presentation_config(
    presentation_cfg: dict[str, Any] | None,
) -> PresentationConfig:
    presentation_cfg = presentation_cfg or {}
    presentation = PresentationConfig(
        scroll_threshold=int(
            presentation_cfg.get("scroll_threshold", DEFAULT_SCROLL_THRESHOLD)
        ),
        viewport_rows=int(
            presentation_cfg.get("viewport_rows", DEFAULT_VIEWPORT_ROWS)
        ),
    )
    if presentation.scroll_threshold < 1:
        raise RuntimeError("presentation.scroll_threshold must be >= 1")
    if presentation.viewport_rows < 1:
        raise RuntimeError("presentation.viewport_rows must be >= 1")
    return presentation
