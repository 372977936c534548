"""Prompt Builder - Construct LLM prompts for the interview and the final message."""

from smartcommit import COMMIT_TYPES

QUESTION_COUNT = 3

_REMOTE_QUESTIONS_ROLE = f"""You are an expert software developer helping a user write a commit message.
Your goal is to understand the "why" behind the changes.

Analyze the provided git diff and recent project history, then generate {QUESTION_COUNT} short,
specific questions that clarify the intent behind the changes.

Focus on the "why", and on the "how" only when it is not obvious. Look at the change
holistically and do not fixate on incidental edits that are not worth asking about.
(Example: "Why did you comment out the array initialization in the loader?")"""

_LOCAL_QUESTIONS_ROLE = f"""You are an expert software developer helping a user write a commit message.
Your goal is to understand the "why" behind the changes.

IMPORTANT:
- Your primary focus MUST be the STAGED CHANGES (the diff).
- The recent history is supporting context ONLY, for style and ongoing work.
- Do NOT ask about the history unless it directly relates to the current changes.

Generate {QUESTION_COUNT} short, specific questions that clarify the intent and context of the changes.

Guidelines:
- Ask about "why" and "intent", not just "what".
- Avoid generic questions like "What does this change do?".
- If the changes are self-explanatory, ask about extra context or side effects.

GOOD questions:
- "Why was the timeout increased to 5 seconds?"
- "What edge case does this nil check handle?"
- "Is this refactor part of a larger cleanup?"

BAD questions:
- "Did you update the file?"
- "What is the new value of X?\""""

_REMOTE_MESSAGE_ROLE = """You are an expert software developer.
Generate a commit message following the Conventional Commits specification.
Use the provided diff, recent project history, and the user's answers to the context questions.

The message needs a clear subject line and a body that explains the "why" only.
Tell the story of the change, connecting it to the project history, rather than
prescribing what was edited. Mind the signal:noise ratio: the reader should come away
understanding why the change exists. Match the tone of the project history.

DO NOT:
- Describe what is in the diff
- Use marketing language
- Be verbose

Example:
fix(router): re-encode routes template as US-ASCII

Running the full rake suite failed every router spec with "invalid byte
sequence in US-ASCII", while running the router specs alone passed. The
routes template was the only file in the repository saved as UTF-8 and it
carried an invisible non-breaking space. Converting it back to US-ASCII
removes the character and makes the suite independent of load order."""

_HISTORY_ROLE = """You are an expert software developer.
Analyze the provided git diff and recent project history.
Decide whether the recent history is relevant to the current changes (similar files, related features, follow-up fixes).
If it is relevant, extract the key context points to keep in mind when writing the commit message.
If it is not relevant, say so and return no context points."""


class PromptBuilder:
    """Constructs system and user prompts for one provider family.

    `local` selects the compact, rule-based prompts that small local models
    follow more reliably than the narrative prompts used for hosted models.
    """

    def __init__(self, local: bool = False):
        self.local = local

    def questions_system(self) -> str:
        return _LOCAL_QUESTIONS_ROLE if self.local else _REMOTE_QUESTIONS_ROLE

    def message_system(self) -> str:
        if not self.local:
            return _REMOTE_MESSAGE_ROLE
        return self._build_local_message_rules()

    def history_system(self) -> str:
        return _HISTORY_ROLE

    def _build_local_message_rules(self) -> str:
        types = ", ".join(COMMIT_TYPES)
        return f"""You are an expert software developer.
Generate a commit message following the Conventional Commits specification.
Use the provided diff, recent project history, and the user's answers to the context questions.

Rules:
1. The subject line MUST be in the format: <type>(<scope>): <description>
2. Allowed types: {types}.
3. Keep the subject under 50 characters if possible.
4. The body should explain "what" and "why", not just "how".
5. Use the user's answers to provide specific context.

Template:
<type>(<scope>): <subject>

<body>"""

    def changes_prompt(self, diff: str, history: str) -> str:
        return f"Diff:\n{diff}\n\nRecent History:\n{history}"

    def message_prompt(self, diff: str, history: str, answers: dict[str, str]) -> str:
        qa_pairs = "".join(f"Q: {q}\nA: {a}\n" for q, a in answers.items())
        return f"{self.changes_prompt(diff, history)}\n\nUser Context:\n{qa_pairs}"


def with_key_context(history: str, key_context: list[str]) -> str:
    """Append the history analysis bullets to the raw history."""
    if not key_context:
        return history
    return history + "\n\nKey Context from History:\n- " + "\n- ".join(key_context)
