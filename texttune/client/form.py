from __future__ import annotations

from dataclasses import dataclass

import httpx

from texttune.client.backend import BackendClient, BackendError
from texttune.core.errors import ValidationError
from texttune.core.logging import get_logger
from texttune.services.constraints import validate_word_limits
from texttune.services.prompting import DEFAULT_TONE, Mode, Tone

logger = get_logger(__name__)

INVALID_BOUND_MESSAGE = "Word limits must be positive whole numbers."


def parse_bound(raw: str) -> int | None:
    """Turn a bound field into an integer, or ``None`` when left blank."""
    value = raw.strip()
    if not value:
        return None
    try:
        parsed = int(value)
    except ValueError:
        raise ValidationError(INVALID_BOUND_MESSAGE) from None
    if parsed < 1:
        raise ValidationError(INVALID_BOUND_MESSAGE)
    return parsed


@dataclass
class ModeState:
    input_text: str = ""
    max_words: str = ""
    min_words: str = ""
    result: str = ""


class FormController:
    """Form state for both modes and the submit flow against the backend.

    Only one request is in flight at a time: ``submit`` refuses to run while
    ``is_loading`` is set, the same way the UI disables its button.
    """

    def __init__(self, backend: BackendClient, mode: Mode = Mode.REWRITE) -> None:
        self.backend = backend
        self.mode = mode
        self.states: dict[Mode, ModeState] = {m: ModeState() for m in Mode}
        self.tone: Tone = DEFAULT_TONE
        self.is_loading = False
        self.error: str | None = None

    @property
    def state(self) -> ModeState:
        return self.states[self.mode]

    @property
    def result(self) -> str:
        return self.state.result

    @property
    def can_submit(self) -> bool:
        return not self.is_loading and bool(self.state.input_text.strip())

    def switch_mode(self, mode: Mode) -> None:
        self.mode = mode

    def set_input(self, text: str) -> None:
        self.state.input_text = text

    def set_word_limits(self, max_words: str = "", min_words: str = "") -> None:
        self.state.max_words = max_words
        self.state.min_words = min_words

    def select_tone(self, tone: str | Tone) -> None:
        self.tone = tone if isinstance(tone, Tone) else Tone.parse(tone)

    async def submit(self) -> str | None:
        if not self.can_submit:
            return None

        mode = self.mode
        state = self.state
        profile = mode.profile
        state.result = ""
        self.error = None

        try:
            max_words = parse_bound(state.max_words)
            min_words = parse_bound(state.min_words)
            validate_word_limits(max_words, min_words)
        except ValidationError as exc:
            self.error = exc.message
            return None

        self.is_loading = True
        try:
            body = await self.backend.call(
                mode.endpoint,
                {
                    profile.input_field: state.input_text,
                    "wordLimit": max_words,
                    "minWordLimit": min_words,
                    "tone": self.tone.value,
                },
            )
            state.result = body[profile.result_field]
        except BackendError as exc:
            # The backend's message already carries the mode label.
            self.error = exc.message
        except (httpx.HTTPError, ValueError, KeyError) as exc:
            logger.warning("backend_call_failed", mode=mode.name.lower(), error=str(exc))
            self.error = mode.failure_message(str(exc) or type(exc).__name__)
        finally:
            self.is_loading = False

        return state.result or None
