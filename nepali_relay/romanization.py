"""
Pre-processing for romanized Nepali ("Nepanglish") input.

People type Nepali in Latin script the way they would in a chat: "xa" for
"छ", "k" for "के". The upstream transliterators only know the textbook
spellings, so a handful of fixed substitutions are applied before dispatch.
"""

import re
from typing import List, Tuple

# Whole-word substitutions, applied in order. Matching is case-insensitive.
WORD_SUBSTITUTIONS: List[Tuple[str, str]] = [
    ("xaina", "chhaina"),
    ("xainw", "chhaina"),
    ("xau", "chhau"),
    ("xan", "chhan"),
    ("xha", "chha"),
    ("xa", "chha"),
    ("xu", "chhu"),
    ("k", "ke"),
]

_HORIZONTAL_SPACE_RE = re.compile(r"[ \t]+")
# Letter runs glued to digits ("xa2") are left alone.
_WORD_RE = re.compile(r"\b[A-Za-z]+\b")

_WORD_TABLE = {source: target for source, target in WORD_SUBSTITUTIONS}


def _substitute_word(match: re.Match) -> str:
    word = match.group(0)
    replacement = _WORD_TABLE.get(word.lower())
    if replacement is not None:
        return replacement
    if "x" in word or "X" in word:
        # Romanized Nepali never uses the Latin "x" sound.
        return re.sub("[xX]", "chh", word)
    return word


def _collapse_spaces(text: str) -> str:
    lines = (_HORIZONTAL_SPACE_RE.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(lines).strip()


def normalize_romanized(text: str) -> str:
    """
    Normalize romanized Nepali text before sending it upstream.

    Collapses runs of spaces and tabs but keeps line breaks, so paragraphs
    come back as paragraphs. Then rewrites chat spellings word by word.
    Digits and punctuation are left untouched.
    """
    if not text:
        return ""
    collapsed = _collapse_spaces(text)
    if not collapsed:
        return ""
    return _WORD_RE.sub(_substitute_word, collapsed)


__all__ = ["WORD_SUBSTITUTIONS", "normalize_romanized"]
