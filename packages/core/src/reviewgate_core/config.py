import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from reviewgate_core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "reviewers_file": None,  # path to a JSON array of logins
    "reviewers": None,  # inline list of logins, used when reviewers_file is unset
}


def load_config(config_path: str = ".reviewgate.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .reviewgate.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping, got {type(file_config).__name__}.")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


@dataclass(frozen=True)
class ReviewerSource:
    """Where the authorized reviewer logins come from.

    ``path`` takes precedence over ``logins`` when both are set.
    """

    path: str | None = None
    logins: tuple[str, ...] | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.path) or self.logins is not None


@dataclass(frozen=True)
class GateConfig:
    """Explicit configuration for one gate run."""

    credential: str | None = None
    reviewers: ReviewerSource = field(default_factory=ReviewerSource)

    @classmethod
    def from_dict(cls, config: dict) -> "GateConfig":
        inline = config.get("reviewers")
        if inline is not None and (
            not isinstance(inline, (list, tuple)) or not all(isinstance(login, str) for login in inline)
        ):
            raise ConfigError("'reviewers' must be a list of GitHub logins.")
        path = config.get("reviewers_file")
        if path is not None and not isinstance(path, str):
            raise ConfigError("'reviewers_file' must be a path string.")
        return cls(
            credential=config.get("github_token") or None,
            reviewers=ReviewerSource(
                path=path or None,
                logins=tuple(inline) if inline is not None else None,
            ),
        )


def load_authorized_reviewers(source: ReviewerSource) -> frozenset[str]:
    """
    Load the set of logins whose approval satisfies the gate.

    The file, when configured, must be a JSON array of strings, e.g.
    ``["alice", "bob"]``.
    """
    if source.path:
        p = Path(source.path)
        try:
            raw = p.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read reviewers JSON file {source.path}: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"Could not read reviewers JSON file {source.path}: not UTF-8 ({e.reason})") from e
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Reviewers JSON file {source.path} is not valid JSON: {e}") from e
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise ConfigError(f"Reviewers JSON file {source.path} must be an array of login strings.")
        return _clean_logins(data, origin=source.path)

    if source.logins is not None:
        return _clean_logins(source.logins, origin="inline reviewers")

    raise ConfigError("Missing reviewers JSON")


def _clean_logins(logins, origin: str) -> frozenset[str]:
    # Logins are matched exactly; no case folding or whitespace trimming.
    cleaned = set()
    for login in logins:
        if not login:
            logger.warning("Ignoring empty login in %s", origin)
            continue
        cleaned.add(login)
    return frozenset(cleaned)
