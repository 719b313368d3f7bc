"""Configuration loading with priority: env > config file > preset > defaults."""

from __future__ import annotations

import importlib.resources
import os
from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict

from oslovision.exceptions import InteractiveModeRequiredError

DEFAULT_BASE_URL = "https://app.oslo.vision/api/v1"

CONFIG_DIR = Path.home() / ".config" / "oslovision"
CONFIG_PATH = CONFIG_DIR / "config.yaml"

_SECTION = "oslo"


def is_interactive_disabled() -> bool:
    """Return True when OSLOVISION_NO_INTERACTIVE is 'true' (case-insensitive)."""
    return os.environ.get("OSLOVISION_NO_INTERACTIVE", "").lower() == "true"


def require_interactive(hint: str) -> None:
    """Raise if interactive prompts are disabled.

    Parameters
    ----------
    hint:
        Human-readable explanation of which CLI flag / env var the caller
        should use instead of an interactive prompt.

    """
    if is_interactive_disabled():
        raise InteractiveModeRequiredError(
            f"Interactive prompt required but OSLOVISION_NO_INTERACTIVE=true. {hint}"
        )


def get_config_path(config_path: Path | None = None) -> Path:
    """Return path to config file.

    Uses *config_path* if provided, otherwise OSLOVISION_CONFIG env var,
    otherwise default CONFIG_PATH.
    """
    if config_path is not None:
        return config_path
    path = os.environ.get("OSLOVISION_CONFIG")
    return Path(path) if path else CONFIG_PATH


def _load_preset_data() -> dict[str, object]:
    """Load the bundled preset YAML and return raw dict."""
    ref = importlib.resources.files("oslovision.presets").joinpath("default.yaml")
    text = ref.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if isinstance(data, dict):
        return data
    return {}


def _load_raw_yaml(path: Path) -> dict[str, object]:
    """Load a YAML file and return its top-level mapping (or empty dict)."""
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        logger.warning(f"Invalid config format in {path}; expected mapping.")
        return {}
    return data


class ClientConfig(BaseModel):
    """Oslo API connection settings.

    Frozen: a client keeps the same token and base URL for its lifetime.
    """

    model_config = ConfigDict(frozen=True)

    token: str = ""
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def _from_section(cls, data: dict[str, object]) -> ClientConfig:
        """Build from a raw YAML top-level dict (reads the ``oslo`` key)."""
        section = data.get(_SECTION, {})
        if not isinstance(section, dict):
            return cls()
        return cls(
            **{
                k: str(v)
                for k, v in section.items()
                if k in cls.model_fields and v is not None
            }
        )

    @classmethod
    def from_file(cls, path: Path = CONFIG_PATH) -> ClientConfig:
        """Load config from a YAML file.  Returns default config if file is missing."""
        if not path.is_file():
            return cls()
        logger.trace(f"Loading config from {path}")
        return cls._from_section(_load_raw_yaml(path))

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build config from environment variables.

        Unset variables leave the field empty so that :meth:`merge` skips it.
        """
        return cls(
            token=os.environ.get("OSLO_API_TOKEN", ""),
            base_url=os.environ.get("OSLO_BASE_URL", ""),
        )

    def merge(self, override: ClientConfig) -> ClientConfig:
        """Return a new config where *override* values take priority over self.

        Only non-empty values from *override* win.
        """
        return ClientConfig(
            token=override.token or self.token,
            base_url=override.base_url or self.base_url,
        )

    @classmethod
    def load(cls, config_path: Path | None = None) -> ClientConfig:
        """Merge preset, file, and env: preset < file < env."""
        preset_cfg = cls._from_section(_load_preset_data())
        path = get_config_path(config_path)
        file_cfg = cls.from_file(path)
        env_cfg = cls.from_env()
        return preset_cfg.merge(file_cfg).merge(env_cfg)

    def save_to_file(self, path: Path = CONFIG_PATH) -> Path:
        """Write the ``oslo`` section to a YAML file, preserving other sections."""
        path.parent.mkdir(parents=True, exist_ok=True)
        existing = _load_raw_yaml(path)
        section: dict[str, str] = {"base_url": self.base_url}
        if self.token:
            section["token"] = self.token
        existing[_SECTION] = section
        content = yaml.safe_dump(existing, default_flow_style=False, sort_keys=False)
        if not content.endswith("\n"):
            content += "\n"
        path.write_text(content, encoding="utf-8")
        logger.info(f"Config saved to {path}")
        return path

    def masked_token(self) -> str:
        """Return the token with everything but a short prefix hidden."""
        if not self.token:
            return ""
        return f"{self.token[:6]}..."
