"""LLM Client Package"""

from llmc.config import Config
from llmc.llm.base import LLMClient, LLMResponse, LLMError, API_KEY_NAMES, resolve_api_key
from llmc.llm.claude import ClaudeClient
from llmc.llm.ollama import OllamaClient
from llmc.llm.openai_compat import OpenAICompatibleClient, ENDPOINTS
from llmc.llm.replicate_client import ReplicateClient

PROVIDERS: dict[str, type[LLMClient]] = {
    "anthropic": ClaudeClient,
    "ollama": OllamaClient,
    "replicate": ReplicateClient,
    **{name: OpenAICompatibleClient for name in ENDPOINTS},
}


def get_client(config: Config) -> LLMClient:
    """Build the client for the configured provider."""
    client_class = PROVIDERS.get(config.provider)
    if client_class is None:
        raise LLMError(
            f"Unknown provider: {config.provider}. "
            f"Use one of: {', '.join(sorted(PROVIDERS))}."
        )
    return client_class(config)


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "OllamaClient",
    "OpenAICompatibleClient",
    "ReplicateClient",
    "API_KEY_NAMES",
    "ENDPOINTS",
    "PROVIDERS",
    "get_client",
    "resolve_api_key",
]
