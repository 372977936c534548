"""OpenAI LLM Client"""

import os

from openai import OpenAI, APIError, AuthenticationError
from pydantic import BaseModel, ValidationError

from smartcommit.config import API_KEY_ENV
from smartcommit.llm.base import (
    CommitDraft,
    CommitMessageResponse,
    HistoryAnalysis,
    HistoryAnalysisResponse,
    LLMError,
    Provider,
    QuestionsResponse,
    ResponseParseError,
)
from smartcommit.prompts import PromptBuilder


def response_format(name: str, description: str, model: type[BaseModel]) -> dict:
    """Strict JSON-schema response format for a pydantic response model."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name,
            "description": description,
            "schema": model.model_json_schema(),
            "strict": True,
        },
    }


class OpenAIClient(Provider):
    """OpenAI API client. Requires an API key from config or OPENAI_API_KEY."""

    DEFAULT_MODEL = "gpt-4o-2024-08-06"
    LOCAL_PROMPTS = False

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.api_key = api_key or os.environ.get(API_KEY_ENV)
        self.model = model or self.DEFAULT_MODEL
        self.prompts = PromptBuilder(local=self.LOCAL_PROMPTS)

        if not self.api_key:
            raise LLMError(
                "No API key found. Run smartcommit --setup or set OPENAI_API_KEY:\n"
                "  export OPENAI_API_KEY='your-key-here'"
            )

        # Requests are single-shot: a failure is reported, never retried
        self._client = client if client is not None else self._build_client()

    def _build_client(self) -> OpenAI:
        return OpenAI(api_key=self.api_key, max_retries=0)

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def _translate_error(self, action: str, error: APIError) -> LLMError:
        if isinstance(error, AuthenticationError):
            return LLMError("Invalid API key. Check your OpenAI API key with smartcommit --setup.")
        return LLMError(f"failed to {action}: {error}")

    def _request(self, action: str, system: str, user: str, fmt: dict, model: type[BaseModel]):
        """Send one structured request and validate the reply against `model`."""
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                response_format=fmt,
            )
        except APIError as e:
            raise self._translate_error(action, e) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ResponseParseError("failed to parse JSON response: the model returned no content")

        try:
            return model.model_validate_json(content)
        except ValidationError as e:
            raise ResponseParseError(f"failed to parse JSON response: {e}") from e

    def generate_questions(self, diff: str, history: str) -> list[str]:
        result = self._request(
            "generate questions",
            self.prompts.questions_system(),
            self.prompts.changes_prompt(diff, history),
            response_format("questions_response", "List of clarifying questions", QuestionsResponse),
            QuestionsResponse,
        )
        return [q.strip() for q in result.questions if q.strip()]

    def generate_commit_message(self, diff: str, history: str, answers: dict[str, str]) -> CommitDraft:
        result = self._request(
            "generate commit message",
            self.prompts.message_system(),
            self.prompts.message_prompt(diff, history, answers),
            response_format("commit_message_response", "A structured commit message", CommitMessageResponse),
            CommitMessageResponse,
        )
        return CommitDraft(subject=result.subject, body=result.body)

    def analyze_history(self, diff: str, history: str) -> HistoryAnalysis:
        result = self._request(
            "analyze history",
            self.prompts.history_system(),
            self.prompts.changes_prompt(diff, history),
            response_format("history_analysis_response", "Analysis of project history relevance", HistoryAnalysisResponse),
            HistoryAnalysisResponse,
        )
        return HistoryAnalysis(is_relevant=result.is_relevant, key_context=list(result.key_context))
