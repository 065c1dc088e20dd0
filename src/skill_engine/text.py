"""Text normalization shared by trigger extraction, matching, and composition.

Tokens are casefolded Unicode letter and digit runs whose offsets index the
text as given. Each token carries a light suffix stem so that simple
morphological variants compare equal::

    >>> [t.stem for t in tokenize("Testing tests, tested TEST")]
    ['test', 'test', 'test', 'test']
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

# Unicode word runs. Katakana, hiragana and Han runs are separate tokens.
_KATAKANA = r"\u30a0-\u30ff\u31f0-\u31ff"
_HIRAGANA = r"\u3040-\u309f"
_HAN = r"\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff"
_TOKEN_PATTERN = re.compile(
    rf"[{_KATAKANA}]+|[{_HIRAGANA}]+|[{_HAN}]+|[^\W_{_KATAKANA}{_HIRAGANA}{_HAN}]+"
)

# Doubled final consonants that survive suffix stripping ("committ" -> "commit").
_UNDOUBLE_EXEMPT = frozenset("lsz")

_MIN_STEM_LENGTH = 3

STOPWORDS: frozenset[str] = frozenset(
    {
        "a", "about", "after", "again", "all", "also", "an", "and", "any", "are",
        "as", "ask", "asks", "at", "be", "been", "before", "being", "both", "but",
        "by", "can", "could", "do", "does", "doing", "e", "eg", "etc", "every",
        "for", "from", "g", "get", "had", "has", "have", "help", "helps", "how",
        "i", "ie", "if", "in", "into", "is", "it", "its", "just", "like", "make",
        "me", "more", "most", "my", "need", "needs", "no", "not", "of", "on",
        "one", "only", "or", "other", "our", "out", "over", "own", "please",
        "request", "requests", "same", "should", "skill", "so", "some", "such",
        "task", "tasks", "than", "that", "the", "their", "them", "then", "there",
        "these", "they", "this", "those", "through", "to", "too", "under",
        "until", "up", "us", "use", "used", "user", "users", "uses", "using",
        "very", "via", "want", "wants", "was", "we", "were", "what", "when",
        "where", "whether", "which", "while", "who", "why", "will", "with",
        "would", "you", "your",
    }
)


@dataclass(frozen=True)
class Token:
    """A normalized word and where it starts in the original text.

    Attributes:
        text: Casefolded surface form.
        stem: Suffix-stripped form used for comparisons.
        start: Character offset of the token in the text passed to ``tokenize``.
    """

    text: str
    stem: str
    start: int


def stem(word: str) -> str:
    """Reduce a word to a crude stem.

    Strips plural ``s``/``ies``, then ``ing``/``ed``, undoubles a trailing
    consonant left behind, and finally drops a silent ``e``. The same rules
    apply on both sides of every comparison, so consistency matters more
    than linguistic accuracy.

    Args:
        word: A single word.

    Returns:
        The stemmed, casefolded word.
    """
    w = word.casefold()
    if len(w) > 4 and w.endswith("ies"):
        return w[:-3] + "y"
    if len(w) > 3 and w.endswith("s") and not w.endswith("ss"):
        w = w[:-1]
    for suffix in ("ing", "ed"):
        if w.endswith(suffix) and len(w) - len(suffix) >= _MIN_STEM_LENGTH:
            w = w[: -len(suffix)]
            if len(w) > _MIN_STEM_LENGTH and w[-1] == w[-2] and w[-1] not in _UNDOUBLE_EXEMPT:
                w = w[:-1]
            break
    if len(w) > _MIN_STEM_LENGTH and w.endswith("e"):
        w = w[:-1]
    return w


def tokenize(text: str) -> list[Token]:
    """Split text into normalized tokens.

    Args:
        text: Arbitrary text.

    Returns:
        Tokens in order of appearance. Offsets refer to ``text`` itself,
        so they line up with other searches over the same string.
    """
    return [
        Token(text=m.group(0).casefold(), stem=stem(m.group(0)), start=m.start())
        for m in _TOKEN_PATTERN.finditer(text)
    ]


def stems(text: str) -> tuple[str, ...]:
    """Return the stem of every token in ``text``."""
    return tuple(token.stem for token in tokenize(text))


def is_stopword(token: Token) -> bool:
    """Whether a token carries no topical meaning on its own."""
    return token.text in STOPWORDS or token.stem in STOPWORDS or token.text.isdigit()


def content_stems(text: str) -> frozenset[str]:
    """Return the set of non-stopword stems in ``text``."""
    return frozenset(token.stem for token in tokenize(text) if not is_stopword(token))


def jaccard(left: frozenset[str], right: frozenset[str]) -> float:
    """Jaccard similarity of two stem sets (0.0 when both are empty)."""
    if not left and not right:
        return 0.0
    return len(left & right) / len(left | right)


def find_sequence(haystack: Sequence[Token], needle: tuple[str, ...]) -> int | None:
    """Find the first contiguous run of stems in a token list.

    Args:
        haystack: Tokens to search.
        needle: Stems that must appear consecutively.

    Returns:
        Index into ``haystack`` of the first token of the match, or ``None``.
    """
    if not needle or len(needle) > len(haystack):
        return None
    width = len(needle)
    for i in range(len(haystack) - width + 1):
        if all(haystack[i + k].stem == needle[k] for k in range(width)):
            return i
    return None
