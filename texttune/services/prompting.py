from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from texttune.core.errors import UnsupportedToneError

_REWRITE_TEMPLATE = (
    "Perform a grammar check and rewrite the following text in perfect, natural-sounding English. "
    "Correct any grammatical errors, awkward phrasing, spelling mistakes, or unclear expressions. "
    "Focus on clarity, conciseness, and accuracy while maintaining the original meaning.\n\n"
    'Text to rewrite: "{text}"\n\n'
    "Rewritten text:"
)

_GENERATE_TEMPLATE = (
    "Generate a message based on the following request. Be creative and helpful.\n\n"
    'Request: "{text}"\n\n'
    "Generated message:"
)


class Tone(str, Enum):
    NEUTRAL = "neutral"
    FORMAL = "formal"
    INFORMAL = "informal"
    FRIENDLY = "friendly"
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    PERSUASIVE = "persuasive"
    EMPATHETIC = "empathetic"
    ENTHUSIASTIC = "enthusiastic"
    HUMOROUS = "humorous"

    @classmethod
    def parse(cls, value: str | None) -> Tone:
        if value is None or not value.strip():
            return cls.NEUTRAL
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnsupportedToneError(f"Unsupported tone: {value}.") from None


DEFAULT_TONE = Tone.NEUTRAL


@dataclass(frozen=True)
class ModeProfile:
    template: str
    temperature: float
    max_output_tokens: int
    input_field: str
    result_field: str
    missing_input_message: str
    failure_label: str


class Mode(Enum):
    REWRITE = ModeProfile(
        template=_REWRITE_TEMPLATE,
        temperature=0.7,
        max_output_tokens=1000,
        input_field="text",
        result_field="rewrittenText",
        missing_input_message="No text provided for rewriting.",
        failure_label="Failed to rewrite text",
    )
    GENERATE = ModeProfile(
        template=_GENERATE_TEMPLATE,
        temperature=0.9,
        max_output_tokens=500,
        input_field="prompt",
        result_field="generatedText",
        missing_input_message="No prompt provided for generation.",
        failure_label="Failed to generate text",
    )

    @property
    def profile(self) -> ModeProfile:
        return self.value

    @property
    def endpoint(self) -> str:
        return f"/{self.name.lower()}"

    def base_prompt(self, raw_input: str) -> str:
        return self.value.template.format(text=raw_input)

    def failure_message(self, reason: str) -> str:
        return f"{self.value.failure_label}: {reason}"


def constraint_clauses(
    min_word_limit: int | None,
    max_word_limit: int | None,
    tone: Tone | str | None,
) -> list[str]:
    clauses: list[str] = []
    if min_word_limit is not None and min_word_limit > 0:
        clauses.append(f"minimum {min_word_limit} words")
    if max_word_limit is not None and max_word_limit > 0:
        clauses.append(f"approximately {max_word_limit} words")
    tone_value = tone.value if isinstance(tone, Tone) else tone
    if tone_value and tone_value != DEFAULT_TONE.value:
        clauses.append(f"in a {tone_value} tone")
    return clauses


def compose_prompt(
    mode: Mode,
    raw_input: str,
    min_word_limit: int | None = None,
    max_word_limit: int | None = None,
    tone: Tone | str | None = None,
) -> str:
    """Build the instruction sent upstream.

    The base template for ``mode`` embeds ``raw_input`` verbatim. Supplied
    constraints follow as one parenthesised list: minimum words, then
    approximate words, then tone.
    """
    prompt = mode.base_prompt(raw_input)
    clauses = constraint_clauses(min_word_limit, max_word_limit, tone)
    if clauses:
        prompt += f" ({' and '.join(clauses)})"
    return prompt
