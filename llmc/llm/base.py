"""LLM Base Classes and Shared Code"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

from llmc.config import Config

# Environment variable each provider reads its key from
API_KEY_NAMES = {
    "anthropic": "ANTHROPIC_API_KEY",
    "cerebras": "CEREBRAS_API_KEY",
    "cohere": "COHERE_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "google": "GOOGLE_API_KEY",
    "groq": "GROQ_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "openai": "OPENAI_API_KEY",
    "perplexity": "PERPLEXITY_API_KEY",
    "replicate": "REPLICATE_API_KEY",
    "togetherai": "TOGETHER_AI_API_KEY",
    "vercel": "VERCEL_API_KEY",
    "xai": "XAI_API_KEY",
}


def resolve_api_key(config: Config) -> str | None:
    """Key precedence: config api_key, then config api_key_name env var, then the provider default env var."""
    if config.api_key:
        return config.api_key
    if config.api_key_name and os.environ.get(config.api_key_name):
        return os.environ[config.api_key_name]
    env_name = API_KEY_NAMES.get(config.provider)
    if env_name:
        return os.environ.get(env_name)
    return None


def missing_key_error(config: Config) -> 'LLMError':
    env_name = config.api_key_name or API_KEY_NAMES.get(config.provider, "API_KEY")
    return LLMError(
        f"No API key found for {config.provider}. Set the {env_name} environment variable:\n"
        f"  export {env_name}='your-key-here'\n"
        "or add api_key to llmc.toml"
    )


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
