"""Compare sent text with received text and locate the mistakes.

Mistakes are reported as character positions within the sent text.
"""

from __future__ import annotations

import re
from functools import lru_cache

_LINE = re.compile(r"[^\n\r\x0b\x0c\x85\u2028\u2029]+")
_WORD = re.compile(r"[^ ]+")

# Limits how many whole words may be assumed missing along one comparison path.
_MAX_MISSED_WORDS = 5


@lru_cache(maxsize=4096)
def _word_mistakes(a: str, b: str) -> tuple[int, ...]:
    """Return positions in ``a`` that do not match ``b``, relative to ``a``."""
    mistakes: list[int] = []
    for i, ch in enumerate(a):
        if i >= len(b):
            mistakes.append(i)
            continue
        if ch == b[i]:
            continue
        mistakes.append(i)
        if i + 1 >= len(a):
            continue
        # Decide whether the char is simply wrong or missing in b.
        rest = a[i + 1:]
        wrong = _word_mistakes(rest, b[i + 1:])
        skip = _word_mistakes(rest, b[i:])
        chosen = skip if len(skip) < len(wrong) else wrong
        mistakes.extend(i + 1 + pos for pos in chosen)
        return tuple(mistakes)
    return tuple(mistakes)


def word_compare(a: str, b: str) -> list[int]:
    """Compare word ``a`` with word ``b`` and return the indices of mistakes in ``a``."""
    return list(_word_mistakes(a, b))


def _spans(pattern: re.Pattern[str], text: str, offset: int = 0) -> list[tuple[int, str]]:
    return [(offset + m.start(), m.group()) for m in pattern.finditer(text)]


def _missing(word: tuple[int, str]) -> list[int]:
    start, text = word
    return list(range(start, start + len(text)))


def _line_compare(awords: list[tuple[int, str]], bwords: list[str]) -> list[int]:
    @lru_cache(maxsize=None)
    def compare(ia: int, ib: int, misses: int) -> tuple[int, ...]:
        mistakes: list[int] = []
        while ia < len(awords):
            if ib >= len(bwords):
                mistakes.extend(_missing(awords[ia]))
                ia += 1
                continue
            start, word = awords[ia]
            found = [start + pos for pos in _word_mistakes(word, bwords[ib])]
            if not found:
                ia += 1
                ib += 1
                continue
            wrong = compare(ia + 1, ib + 1, misses)
            if misses > 0:
                missed = compare(ia + 1, ib, misses - 1)
                if len(word) + len(missed) < len(found) + len(wrong):
                    return tuple(mistakes + _missing(awords[ia]) + list(missed))
            return tuple(mistakes + found + list(wrong))
        return tuple(mistakes)

    return list(compare(0, 0, _MAX_MISSED_WORDS))


def text_compare(a: str, b: str) -> list[int]:
    """Compare text ``a`` with text ``b`` line by line and word by word.

    Returns the positions in ``a`` of every character judged to be wrong or
    missing in ``b``. Empty lines and repeated spaces are ignored.
    """
    mistakes: list[int] = []
    blines = [line for _, line in _spans(_LINE, b)]
    for number, (start, line) in enumerate(_spans(_LINE, a)):
        awords = _spans(_WORD, line, start)
        if number < len(blines):
            bwords = [word for _, word in _spans(_WORD, blines[number])]
            mistakes.extend(_line_compare(awords, bwords))
        else:
            for word in awords:
                mistakes.extend(_missing(word))
    return mistakes