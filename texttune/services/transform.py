from __future__ import annotations

import time

from texttune.core.errors import MissingInputError
from texttune.core.logging import get_logger
from texttune.services.constraints import validate_word_limits
from texttune.services.gemini import GeminiClient
from texttune.services.prompting import Mode, Tone, compose_prompt

logger = get_logger(__name__)


async def transform_text(
    client: GeminiClient,
    mode: Mode,
    *,
    raw_input: str | None,
    max_word_limit: int | None = None,
    min_word_limit: int | None = None,
    tone: str | None = None,
) -> str:
    """Validate the caller's options, compose the prompt and run it upstream.

    Raises a ``ValidationError`` before any network call when the input is
    missing, the bounds are inverted or the tone is unknown. Upstream failures
    propagate unchanged.
    """
    if raw_input is None or not raw_input.strip():
        raise MissingInputError(mode.profile.missing_input_message)
    validate_word_limits(max_word_limit, min_word_limit)
    parsed_tone = Tone.parse(tone)

    prompt = compose_prompt(mode, raw_input, min_word_limit, max_word_limit, parsed_tone)
    profile = mode.profile

    start = time.perf_counter()
    text = await client.generate(
        prompt,
        temperature=profile.temperature,
        max_output_tokens=profile.max_output_tokens,
    )
    logger.info(
        "transform_completed",
        mode=mode.name.lower(),
        tone=parsed_tone.value,
        input_chars=len(raw_input),
        output_chars=len(text),
        latency_ms=round((time.perf_counter() - start) * 1000, 3),
    )
    return text
