"""Replicate LLM Client"""

from llmc.config import Config
from llmc.llm.base import LLMClient, LLMResponse, LLMError, resolve_api_key, missing_key_error


class ReplicateClient(LLMClient):
    """Replicate hosted models. Requires REPLICATE_API_KEY or a configured key."""

    DEFAULT_MODEL = "meta/meta-llama-3-8b-instruct"
    DEFAULT_TIMEOUT = 60

    def __init__(self, config: Config):
        self.api_key = resolve_api_key(config)
        self.model = config.model or self.DEFAULT_MODEL
        self.temperature = config.temperature
        self.max_tokens = config.max_tokens

        if not self.api_key:
            raise missing_key_error(config)

        try:
            from replicate import Client
        except ImportError:
            raise LLMError(
                "Replicate SDK not installed. Run:\n"
                "  pip install replicate"
            )

        kwargs = {"api_token": self.api_key, "timeout": self.DEFAULT_TIMEOUT}
        if config.host:
            kwargs["base_url"] = config.host
        self._client = Client(**kwargs)

    @property
    def name(self) -> str:
        return f"Replicate ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        import httpx
        from replicate.exceptions import ModelError, ReplicateError

        try:
            output = self._client.run(
                self.model,
                input={
                    "prompt": prompt,
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
            )
            # Language models stream their output as a sequence of text chunks
            text = output if isinstance(output, str) else "".join(str(part) for part in output)
        except ModelError as e:
            raise LLMError(f"Replicate model '{self.model}' failed: {e}")
        except ReplicateError as e:
            if e.status == 401:
                raise LLMError("Invalid API key. Check your REPLICATE_API_KEY.")
            raise LLMError(f"Replicate API error: {e}")
        except httpx.TimeoutException:
            raise LLMError(f"Request to Replicate timed out after {self.DEFAULT_TIMEOUT}s")
        except httpx.HTTPError as e:
            raise LLMError(f"Replicate request failed: {e}")

        content = text.strip()
        if not content:
            raise LLMError("Replicate returned an empty response")

        return LLMResponse(content=content, model=self.model)
