"""Bag-of-words tokenizer shared by indexing and querying."""
import re
from typing import Any, List

# Anything that is not a lower-case ASCII letter, digit or whitespace
_NON_TERM_CHARS = re.compile(r"[^a-z0-9\s]")


def tokenize(text: Any) -> List[str]:
    """
    Normalize raw text into a sequence of terms.

    Lower-cases the input, blanks out every character outside ``[a-z0-9]``
    and whitespace, then splits on whitespace runs. No stemming and no
    stop-word removal. Never raises: ``None`` or non-string input yields an
    empty list.

    Args:
        text: Raw text

    Returns:
        List of terms in their original order
    """
    if not isinstance(text, str) or not text:
        return []
    return _NON_TERM_CHARS.sub(" ", text.lower()).split()
