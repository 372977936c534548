"""LLM Client Package"""

from smartcommit.config import Config, PROVIDER_OLLAMA, PROVIDER_OPENAI
from smartcommit.llm.base import (
    CommitDraft,
    CommitMessageResponse,
    HistoryAnalysis,
    HistoryAnalysisResponse,
    LLMError,
    ModelNotFoundError,
    Provider,
    QuestionsResponse,
    ResponseParseError,
)
from smartcommit.llm.ollama import OllamaClient
from smartcommit.llm.openai_client import OpenAIClient


def get_client(config: Config) -> Provider:
    """Select the provider variant named by the configuration."""
    if config.provider == PROVIDER_OPENAI:
        return OpenAIClient(api_key=config.openai_api_key)
    if config.provider == PROVIDER_OLLAMA:
        return OllamaClient(host=config.ollama_url, model=config.ollama_model)

    # Records written before a provider was chosen still carry a key
    if config.openai_api_key:
        return OpenAIClient(api_key=config.openai_api_key)
    raise LLMError(f"unknown provider: {config.provider or '(none)'}")


__all__ = [
    "CommitDraft",
    "CommitMessageResponse",
    "HistoryAnalysis",
    "HistoryAnalysisResponse",
    "LLMError",
    "ModelNotFoundError",
    "OllamaClient",
    "OpenAIClient",
    "Provider",
    "QuestionsResponse",
    "ResponseParseError",
    "get_client",
]
