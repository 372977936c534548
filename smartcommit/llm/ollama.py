"""Ollama LLM Client for Local Models"""

from openai import OpenAI, APIConnectionError, APIError, NotFoundError

from smartcommit.config import DEFAULT_OLLAMA_MODEL, DEFAULT_OLLAMA_URL
from smartcommit.llm.base import LLMError, ModelNotFoundError
from smartcommit.llm.openai_client import OpenAIClient


def normalize_base_url(host: str) -> str:
    """Point a bare Ollama host at its OpenAI-compatible /v1/ endpoint."""
    if host and not host.endswith('/'):
        host += '/'
    if not host.endswith('v1/'):
        host += 'v1/'
    return host


def _is_missing_model(error: NotFoundError) -> bool:
    """A 404 for an unknown model, as opposed to a wrong URL or path."""
    text = f"{error.message} {error.body or ''}".lower()
    return "model" in text and "not found" in text


class OllamaClient(OpenAIClient):
    """Ollama client for local models. Requires: ollama serve

    Ollama accepts the OpenAI request shape, so this reuses the OpenAI client
    against the local endpoint with a placeholder key.
    """

    DEFAULT_MODEL = DEFAULT_OLLAMA_MODEL
    DEFAULT_HOST = DEFAULT_OLLAMA_URL
    PLACEHOLDER_KEY = "ollama"
    LOCAL_PROMPTS = True

    def __init__(self, host: str | None = None, model: str | None = None, client=None):
        self.host = host or self.DEFAULT_HOST
        self.base_url = normalize_base_url(self.host)
        super().__init__(api_key=self.PLACEHOLDER_KEY, model=model, client=client)

    def _build_client(self) -> OpenAI:
        return OpenAI(base_url=self.base_url, api_key=self.api_key, max_retries=0)

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _translate_error(self, action: str, error: APIError) -> LLMError:
        if isinstance(error, NotFoundError) and _is_missing_model(error):
            return ModelNotFoundError(self.model)
        if isinstance(error, APIConnectionError):
            return LLMError(f"failed to {action}: Ollama not running at {self.host}. Start with: ollama serve")
        return LLMError(f"failed to {action}: Ollama error: {error}")
