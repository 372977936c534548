"""Configuration Management Package"""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from smartcommit.output import print_warning

PROVIDER_OPENAI = "openai"
PROVIDER_OLLAMA = "ollama"
VALID_PROVIDERS = {PROVIDER_OPENAI, PROVIDER_OLLAMA}

API_KEY_ENV = "OPENAI_API_KEY"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3.1"


class ConfigError(Exception):
    """Raised when the persisted configuration cannot be read."""
    pass


@dataclass
class Config:
    """Provider selection and credentials."""
    provider: str = PROVIDER_OPENAI
    openai_api_key: str = ""
    ollama_url: str = DEFAULT_OLLAMA_URL
    ollama_model: str = DEFAULT_OLLAMA_MODEL

    def to_dict(self) -> dict:
        return asdict(self)

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        An unknown provider is cleared so the setup flow asks for one.
        """
        warnings = []

        if not isinstance(self.provider, str):
            warnings.append("Invalid provider, choose one in the setup wizard")
            self.provider = ""
        elif self.provider and self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', choose one in the setup wizard")
            self.provider = ""

        for name in ("openai_api_key", "ollama_url", "ollama_model"):
            if not isinstance(getattr(self, name), str):
                warnings.append(f"Invalid {name}, ignoring it")
                setattr(self, name, "")

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        # A record missing a key means the user never set it
        for key in valid_keys - filtered.keys():
            filtered[key] = ""
        config = cls(**filtered)
        for warning in config.validate():
            print_warning(f"Config warning: {warning}")
        return config

    @classmethod
    def defaults(cls, environ=None) -> 'Config':
        """First-run configuration, seeded from the environment."""
        environ = os.environ if environ is None else environ
        return cls(openai_api_key=environ.get(API_KEY_ENV, ""))


class ConfigManager:
    """Loads and saves the configuration record."""

    CONFIG_DIRNAME = "smartcommit"
    CONFIG_FILENAME = "config.json"

    def __init__(self, path: Optional[Path] = None, environ=None):
        self._path = path
        self.environ = os.environ if environ is None else environ

    @property
    def path(self) -> Path:
        if self._path is not None:
            return self._path
        if xdg_config := self.environ.get("XDG_CONFIG_HOME"):
            base = Path(xdg_config)
        else:
            base = Path.home() / ".config"
        return base / self.CONFIG_DIRNAME / self.CONFIG_FILENAME

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Config:
        path = self.path
        if not path.exists():
            return Config.defaults(self.environ)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Could not parse {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Could not read {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Could not parse {path}: expected a JSON object")
        return Config.from_dict(data)

    def save(self, config: Config) -> Path:
        """Write the record. OSError propagates to the caller."""
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path


__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "API_KEY_ENV",
    "DEFAULT_OLLAMA_MODEL",
    "DEFAULT_OLLAMA_URL",
    "PROVIDER_OLLAMA",
    "PROVIDER_OPENAI",
    "VALID_PROVIDERS",
]
