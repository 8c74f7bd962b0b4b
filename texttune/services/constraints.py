from __future__ import annotations

from texttune.core.errors import WordLimitError

WORD_LIMIT_ORDER_MESSAGE = "Max word limit cannot be less than min word limit."


def validate_word_limits(max_word_limit: int | None, min_word_limit: int | None) -> None:
    """Reject a max bound below the min bound.

    Missing bounds are ``None``. Equal bounds are allowed and no other numeric
    check happens here.
    """
    if max_word_limit is None or min_word_limit is None:
        return
    if max_word_limit < min_word_limit:
        raise WordLimitError(WORD_LIMIT_ORDER_MESSAGE)
