"""Configuration Management Package"""

import sys
import tomllib
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

# Valid configuration values
VALID_PROVIDERS = (
    "anthropic",
    "cerebras",
    "cohere",
    "deepseek",
    "google",
    "groq",
    "mistral",
    "ollama",
    "openai",
    "perplexity",
    "replicate",
    "togetherai",
    "vercel",
    "xai",
)

DEFAULT_CONFIG_TOML = '''\
# llmc configuration
#
# Provider: anthropic, cerebras, cohere, deepseek, google, groq, mistral,
#           ollama, openai, perplexity, replicate, togetherai, vercel, xai
provider = "anthropic"
model = "claude-sonnet-4-0"

# Sampling
temperature = 1.0
max_tokens = 250

# API key, read from the environment unless set here.
# api_key_name = "ANTHROPIC_API_KEY"
# api_key = "sk-..."

# Base URL override (Ollama host, OpenAI-compatible gateway, ...)
# host = "http://localhost:11434"

# Custom prompt; ${diff} is replaced with the staged diff.
# prompt = """
# Write a one-line commit message for this diff:
# ${diff}
# """
'''


class ConfigError(Exception):
    """Raised when a configuration file cannot be used."""
    pass


@dataclass
class Config:
    """Runtime configuration with sensible defaults."""
    provider: str = "anthropic"
    model: Optional[str] = None
    temperature: float = 1.0
    max_tokens: int = 250
    prompt: Optional[str] = None
    api_key: Optional[str] = None
    api_key_name: Optional[str] = None
    host: Optional[str] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.provider not in VALID_PROVIDERS:
            warnings.append(
                f"Invalid provider '{self.provider}'. Must be one of: {', '.join(VALID_PROVIDERS)}. "
                f"Falling back to '{defaults.provider}'"
            )
            self.provider = defaults.provider

        if isinstance(self.temperature, bool) or not isinstance(self.temperature, (int, float)) \
                or not 0 <= self.temperature <= 2:
            warnings.append(f"Invalid temperature '{self.temperature}', using {defaults.temperature}")
            self.temperature = defaults.temperature

        if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int) or self.max_tokens <= 0:
            warnings.append(f"Invalid max_tokens '{self.max_tokens}', using {defaults.max_tokens}")
            self.max_tokens = defaults.max_tokens

        if self.prompt is not None and not isinstance(self.prompt, str):
            warnings.append("Invalid prompt, using the default prompt")
            self.prompt = None

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Finds and loads llmc.toml, local file first, then the home directory."""

    CONFIG_FILENAME = "llmc.toml"
    GLOBAL_FILENAME = ".llmc.toml"

    def __init__(self, cwd: Path | None = None, home: Path | None = None):
        self._cwd = cwd
        self._home = home
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    @property
    def local_path(self) -> Path:
        return (self._cwd or Path.cwd()) / self.CONFIG_FILENAME

    @property
    def global_path(self) -> Path:
        return (self._home or Path.home()) / self.GLOBAL_FILENAME

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (self.local_path, self.global_path):
            if path.exists():
                try:
                    self._config = self._load_from_file(path)
                    self._config_path = path
                except ConfigError as e:
                    print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
                    self._config = Config()
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'rb') as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, OSError) as e:
            raise ConfigError(str(e)) from e
        return Config.from_dict(data)

    def write_default(self) -> Path:
        """Create llmc.toml in the working directory. Never overwrites."""
        path = self.local_path
        if path.exists():
            raise ConfigError(f"{self.CONFIG_FILENAME} already exists in the current directory.")
        try:
            path.write_text(DEFAULT_CONFIG_TOML, encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Failed to create {self.CONFIG_FILENAME}: {e}") from e
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


def init_config() -> Path:
    return _manager.write_default()


__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "init_config",
    "VALID_PROVIDERS",
    "DEFAULT_CONFIG_TOML",
]
