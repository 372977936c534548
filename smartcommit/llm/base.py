"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class QuestionsResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    questions: list[str] = Field(
        description="A list of 3 short, specific questions to ask the user to clarify the intent and 'why' behind the changes."
    )


class CommitMessageResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    subject: str = Field(
        description="The commit message subject line, following Conventional Commits specification."
    )
    body: str = Field(
        description="The detailed commit message body explaining the 'what' and 'why'."
    )


class HistoryAnalysisResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    is_relevant: bool = Field(
        description="Whether the recent history is relevant to the current changes."
    )
    key_context: list[str] = Field(
        description="A list of key context points from the history that are relevant to the current changes."
    )


@dataclass
class CommitDraft:
    """The message to be applied. Empty means the user writes it in the editor."""
    subject: str = ""
    body: str = ""

    @classmethod
    def empty(cls) -> 'CommitDraft':
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.subject.strip() and not self.body.strip()

    @property
    def message(self) -> str:
        if self.is_empty:
            return ""
        if not self.body.strip():
            return self.subject.strip()
        return f"{self.subject.strip()}\n\n{self.body.strip()}"


@dataclass
class HistoryAnalysis:
    """Outcome of the history relevance pre-filter."""
    is_relevant: bool
    key_context: list[str]


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class ResponseParseError(LLMError):
    """Raised when a reply does not match the requested schema."""
    pass


class ModelNotFoundError(LLMError):
    """Raised when a local server does not have the requested model."""

    def __init__(self, model: str):
        self.model = model
        super().__init__(f"Model '{model}' not found. Run: ollama pull {model}")


class Provider(ABC):
    """Capability contract shared by every backend."""

    @abstractmethod
    def generate_questions(self, diff: str, history: str) -> list[str]:
        pass

    @abstractmethod
    def generate_commit_message(self, diff: str, history: str, answers: dict[str, str]) -> CommitDraft:
        pass

    @abstractmethod
    def analyze_history(self, diff: str, history: str) -> HistoryAnalysis:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
