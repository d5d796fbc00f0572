"""Claude (Anthropic) LLM Client"""

from llmc.config import Config
from llmc.llm.base import LLMClient, LLMResponse, LLMError, resolve_api_key, missing_key_error


class ClaudeClient(LLMClient):
    """Claude API client. Requires ANTHROPIC_API_KEY or a configured key."""

    DEFAULT_MODEL = "claude-sonnet-4-0"

    def __init__(self, config: Config):
        self.api_key = resolve_api_key(config)
        self.model = config.model or self.DEFAULT_MODEL
        self.temperature = config.temperature
        self.max_tokens = config.max_tokens

        if not self.api_key:
            raise missing_key_error(config)

        try:
            from anthropic import Anthropic
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

        # Retries belong to the commit flow, not the SDK
        kwargs = {"api_key": self.api_key, "max_retries": 0}
        if config.host:
            kwargs["base_url"] = config.host
        self._client = Anthropic(**kwargs)

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from anthropic import APIError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}]
            )
        except AuthenticationError:
            raise LLMError("Invalid API key. Check your ANTHROPIC_API_KEY.")
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

        content = ""
        for block in response.content:
            if block.type == "text":
                content = block.text.strip()
                break

        if not content:
            raise LLMError("Claude returned an empty response")

        return LLMResponse(
            content=content,
            model=self.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens
        )
