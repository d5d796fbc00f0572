"""OpenAI-compatible Chat Completions Client

Covers every hosted provider that speaks the /chat/completions protocol.
"""

from dataclasses import dataclass

from llmc.config import Config
from llmc.llm.base import LLMClient, LLMResponse, LLMError, resolve_api_key, missing_key_error


@dataclass(frozen=True)
class Endpoint:
    """Where a provider lives and which model to use when none is configured."""
    label: str
    base_url: str
    default_model: str


ENDPOINTS = {
    "openai": Endpoint("OpenAI", "https://api.openai.com/v1", "gpt-4o-mini"),
    "cerebras": Endpoint("Cerebras", "https://api.cerebras.ai/v1", "llama3.1-8b"),
    "cohere": Endpoint("Cohere", "https://api.cohere.ai/compatibility/v1", "command-r-08-2024"),
    "deepseek": Endpoint("DeepSeek", "https://api.deepseek.com/v1", "deepseek-chat"),
    "google": Endpoint("Google", "https://generativelanguage.googleapis.com/v1beta/openai", "gemini-2.0-flash"),
    "groq": Endpoint("Groq", "https://api.groq.com/openai/v1", "llama-3.3-70b-versatile"),
    "mistral": Endpoint("Mistral", "https://api.mistral.ai/v1", "mistral-small-latest"),
    "perplexity": Endpoint("Perplexity", "https://api.perplexity.ai", "sonar"),
    "togetherai": Endpoint("Together AI", "https://api.together.xyz/v1", "meta-llama/Llama-3.3-70B-Instruct-Turbo"),
    "vercel": Endpoint("Vercel", "https://api.v0.dev/v1", "v0-1.5-md"),
    "xai": Endpoint("xAI", "https://api.x.ai/v1", "grok-3-mini"),
}


class OpenAICompatibleClient(LLMClient):
    """Client for OpenAI and the providers that mirror its API."""

    DEFAULT_TIMEOUT = 60

    def __init__(self, config: Config):
        if config.provider not in ENDPOINTS:
            raise LLMError(f"Provider '{config.provider}' is not OpenAI-compatible")

        self.endpoint = ENDPOINTS[config.provider]
        self.api_key = resolve_api_key(config)
        self.model = config.model or self.endpoint.default_model
        self.base_url = (config.host or self.endpoint.base_url).rstrip('/')
        self.temperature = config.temperature
        self.max_tokens = config.max_tokens

        if not self.api_key:
            raise missing_key_error(config)

        try:
            from openai import OpenAI
        except ImportError:
            raise LLMError(
                "OpenAI SDK not installed. Run:\n"
                "  pip install openai"
            )

        # Retries belong to the commit flow, not the SDK
        self._client = OpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.DEFAULT_TIMEOUT,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        return f"{self.endpoint.label} ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from openai import APIError, APITimeoutError, AuthenticationError, RateLimitError

        label = self.endpoint.label
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except AuthenticationError:
            raise LLMError(f"Invalid API key for {label}.")
        except RateLimitError as e:
            raise LLMError(f"{label} rate limit exceeded: {e.message}")
        except APITimeoutError:
            raise LLMError(f"Request to {label} timed out after {self.DEFAULT_TIMEOUT}s")
        except APIError as e:
            raise LLMError(f"{label} API error: {e.message}")

        if not response.choices:
            raise LLMError(f"Unexpected response shape from {label}")

        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise LLMError(f"{label} returned an empty response")

        return LLMResponse(
            content=content,
            model=response.model or self.model,
            tokens_used=response.usage.total_tokens if response.usage else 0,
        )
