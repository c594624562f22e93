"""Tutors that send words, generated text, or nothing at all.

:class:`WordsworthTutor` drills common amateur-radio words lesson by lesson,
:class:`GenTextTutor` sends text produced by a rule-based :class:`TextGen`,
and :class:`TXTutor` only takes input from the user.
"""

from __future__ import annotations

import random
from collections import deque
from pathlib import Path

from kochmorse.textgen import TextGen
from kochmorse.tutor import (
    Encoder,
    Tutor,
    VerifyResult,
    _lesson_summary,
    _report,
    _sample_lesson_index,
    _threshold_advice,
)

#: Words of the Wordsworth method, in the order they are introduced.
WORDSWORTH_LESSONS: tuple[str, ...] = (
    "k", "cq", "de", "es", "is", "hi", "hr", "ur", "vy", "73", "my",
    "88", "bk", "cl", "dx", "wx", "el", "fb", "om", "no", "op", "tu",
    "yl", "gm", "gd", "ga", "ge", "gn",
    "abt", "age", "agn", "ant", "btu", "cpy", "cul", "gud", "hw?", "key",
    "pkt", "pse", "pwr", "qrm", "qrn", "qrp", "qro", "qrs", "qrt", "qrx",
    "qrz", "qsb", "qsl", "qso", "qsy", "qth", "rig", "rpt", "rst", "tks",
    "tnx", "yrs",
    "beam", "long", "loop", "name", "runs", "temp", "test", "vert", "watt",
    "wire", "yagi",
    "dipole",
)

_WORDS_PER_LINE = 10


class WordsworthTutor(Tutor):
    """Sends lines of the words learnt so far in the Wordsworth method."""

    def __init__(
        self,
        encoder: Encoder | None,
        lesson: int = 2,
        pref_last_words: bool = False,
        repeat_last_word: bool = False,
        lines: int = 10,
        show_summary: bool = False,
        verify: bool = False,
        hide_output: bool = False,
        success_threshold: int = 90,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(encoder, rng)
        self._lesson = lesson
        self.pref_last_words = pref_last_words
        self.repeat_last_word = repeat_last_word
        self.lines = lines
        self.show_summary = show_summary
        self._verify = verify
        self._hide_output = hide_output
        self.success_threshold = success_threshold
        self._text: deque[str] = deque()
        self._send_text: list[str] = []
        self._linecount = 0
        self.chars_sent = 0
        self.words_sent = 0
        self.lines_sent = 0

    @property
    def lesson(self) -> int:
        """The current lesson, i.e. the number of words in use."""
        return self._lesson

    @lesson.setter
    def lesson(self, value: int) -> None:
        self._lesson = max(2, min(value, len(WORDSWORTH_LESSONS)))

    def needs_decoder(self) -> bool:
        return False

    def is_verifying(self) -> bool:
        return self._verify

    def is_output_hidden(self) -> bool:
        return self._hide_output

    def summary(self) -> str:
        if not self.show_summary:
            return ""
        return _lesson_summary(self.chars_sent, self.words_sent, self.lines_sent,
                               self.success_threshold, self._lesson,
                               len(WORDSWORTH_LESSONS))

    def verify(self, text: str) -> VerifyResult:
        err, correct, html = _report("".join(self._send_text), text, self.chars_sent,
                                     self.words_sent, self.lines_sent)
        html += _threshold_advice(correct, self.success_threshold)
        self._emit_verified("words", self._lesson, correct)
        return VerifyResult(mistakes=err, accuracy=correct, summary=html)

    def next_char(self) -> str:
        if self.at_end():
            self.reset()
        elif not self._text:
            self._next_line()
        return self._text.popleft()

    def at_end(self) -> bool:
        return not self._text and self.lines == self._linecount

    def reset(self) -> None:
        self._text.clear()
        self._linecount = 0
        self._text.extend("vvv\n")
        if self.repeat_last_word:
            newest = WORDSWORTH_LESSONS[self._lesson - 1]
            for _ in range(5):
                self._text.extend(newest)
                self._text.append(" ")
            self._text.append("\n")
        self._send_text.clear()
        self.chars_sent = 0
        self.words_sent = 0
        self.lines_sent = 0
        self._next_line()

    def _next_line(self) -> None:
        for _ in range(_WORDS_PER_LINE):
            word = WORDSWORTH_LESSONS[
                _sample_lesson_index(self._rng, self._lesson, self.pref_last_words)
            ]
            self._text.extend(word)
            self._send_text.append(word)
            self.chars_sent += len(word)
            self._text.append(" ")
            self._send_text.append(" ")
            self.words_sent += 1
        self._text.extend("=  \n")
        self._send_text.append("\n")
        self._linecount += 1
        self.lines_sent += 1


class GenTextTutor(Tutor):
    """Sends text produced by a rule-based text generator, one text per session."""

    def __init__(
        self,
        encoder: Encoder | None,
        source: TextGen | str | Path,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(encoder, rng)
        self.generator = source if isinstance(source, TextGen) else TextGen(source)
        self._current: deque[str] = deque()

    def needs_decoder(self) -> bool:
        return False

    def next_char(self) -> str:
        if not self._current:
            self._current.extend(self.generator.generate({}))
        if not self._current:
            return "\0"
        return self._current.popleft()

    def at_end(self) -> bool:
        return not self._current

    def reset(self) -> None:
        self._current.clear()


class TXTutor(Tutor):
    """A tutor that sends nothing; the user keys and the decoder listens."""

    def __init__(self) -> None:
        super().__init__(None)

    def needs_decoder(self) -> bool:
        return True

    def next_char(self) -> str:
        return "\0"

    def at_end(self) -> bool:
        return False

    def reset(self) -> None:
        """Nothing to reset."""