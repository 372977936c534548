"""Prompt Construction Package"""

from smartcommit.prompts.builder import PromptBuilder, QUESTION_COUNT, with_key_context

__all__ = ["PromptBuilder", "QUESTION_COUNT", "with_key_context"]
