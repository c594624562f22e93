"""Tutors that produce practice text for the Koch and random-character methods.

A tutor feeds characters one at a time to an :class:`Encoder`. Whoever drives
the encoder calls :meth:`Tutor.on_char_sent` after each character has been
keyed, and the tutor answers with the next one until the session ends.
"""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from kochmorse.textcompare import text_compare

#: All symbols of the Koch method, in the order they are introduced.
KOCH_LESSONS: tuple[str, ...] = (
    "k", "m", "r", "s", "u", "a", "p", "t", "l", "o", "w",
    "i", ".", "n", "j", "e", "f", "0", "y", ",", "v", "g",
    "5", "/", "q", "9", "z", "h", "3", "8", "b", "?", "4",
    "2", "7", "c", "1", "d", "6", "x", "=", "+", "\u2403",
)

#: Symbols used by the random tutor when no character set is given.
DEFAULT_RANDOM_CHARS: tuple[str, ...] = (
    *"abcdefghijklmnopqrstuvwxyz",
    *"0123456789",
    ".", ",", "?", "/", "&", ":", ";", "=", "+", "-", "@", "(", ")",
    "\u017a", "\u00e4", "\u0105", "\u00f6", "\u00f8", "\u00f3", "\u00fc", "\u016d",
    "\u03c7", "\u0125", "\u00e0", "\u00e5", "\u00e8", "\u00e9", "\u0109", "\u00f0",
    "\u00de", "\u0109", "\u0107", "\u011d", "\u0125", "\u015d", "\u0142", "\u0144",
    "\u00f1", "\u0107", "\u00bf", "\u00a1", "\u00df", "\u0144",
    "\u2417", "\u2404", "\u2403", "\u2406",
)

# Every line holds at least this many symbols, whatever the group size.
_SYMBOLS_PER_LINE = 25

_MISTAKE_SPAN = '<span style="background-color:red;">{}</span>'


class Encoder:
    """Receives the characters a tutor wants keyed.

    This base keeps the characters in :attr:`sent`; audio encoders subclass it.
    """

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.running = False

    def start(self) -> None:
        """Start keying."""
        self.running = True

    def stop(self) -> None:
        """Stop keying."""
        self.running = False

    def send(self, ch: str) -> None:
        """Queue one character to be keyed."""
        self.sent.append(ch)


@dataclass(frozen=True)
class VerifyResult:
    """Outcome of comparing the sent text with what the user entered."""

    mistakes: int
    accuracy: int
    summary: str


class Tutor(ABC):
    """Base class of all tutors."""

    def __init__(self, encoder: Encoder | None, rng: random.Random | None = None) -> None:
        self.encoder = encoder
        self.running = False
        self._rng = rng if rng is not None else random.Random()
        self.finished_listeners: list[Callable[[], None]] = []
        self.verified_listeners: list[Callable[[str, int, int], None]] = []

    @abstractmethod
    def needs_decoder(self) -> bool:
        """Return True if the tutor takes keyed input from the user."""

    def is_verifying(self) -> bool:
        """Return True if the user types what was received for checking."""
        return False

    def is_output_hidden(self) -> bool:
        """Return True if the sent text should not be shown."""
        return False

    def verify(self, text: str) -> VerifyResult:
        """Compare ``text`` with what was sent in this session."""
        return VerifyResult(mistakes=0, accuracy=0, summary="")

    def summary(self) -> str:
        """Return a summary of the session."""
        return ""

    @abstractmethod
    def next_char(self) -> str:
        """Return the next character of the session."""

    @abstractmethod
    def at_end(self) -> bool:
        """Return True once the last character of the session was taken."""

    def handle(self, ch: str) -> None:
        """Handle a character received from the user."""

    def start(self) -> None:
        """Start a new session and send its first character."""
        self.reset()
        self.running = True
        if self.encoder is not None:
            self.encoder.start()
            self.encoder.send(self.next_char())

    def stop(self) -> None:
        """Stop the session."""
        self.running = False
        if self.encoder is not None:
            self.encoder.stop()

    @abstractmethod
    def reset(self) -> None:
        """Discard the current session and prepare a new one."""

    def on_char_sent(self, ch: str) -> None:
        """Called once ``ch`` was keyed; sends the next character or ends the session."""
        if not self.at_end() and self.running:
            if self.encoder is not None:
                self.encoder.send(self.next_char())
        elif self.at_end():
            self._emit_finished()

    def _emit_finished(self) -> None:
        for listener in self.finished_listeners:
            listener()

    def _emit_verified(self, tutor: str, lesson: int, score: int) -> None:
        for listener in self.verified_listeners:
            listener(tutor, lesson, score)


def _report(
    sent: str, text: str, chars: int, words: int, lines: int
) -> tuple[int, int, str]:
    """Return mistakes, accuracy in percent and the HTML report for a session."""
    mistakes = set(text_compare(sent.lower(), text.lower()))
    err = len(mistakes)
    tx = "".join(
        "<br>" if ch == "\n" else _MISTAKE_SPAN.format(ch) if i in mistakes else ch
        for i, ch in enumerate(sent)
    )
    rx = "".join("<br>" if ch == "\n" else ch for ch in text)
    correct = int(100 * (chars - err) / chars) if chars else 0
    html = (
        f"<html><h3>Text send:</h3><p>{tx}</p>"
        f"<h3>Text entered:</h3><p>{rx}</p>"
        f"<h3>Summary:</h3><p>Characters/Words/Lines send: {chars}/{words}/{lines}<br>"
        f"Mistakes: {err}<br>"
        f"Accuracy: <b>{correct}%</b></p>"
    )
    return err, correct, html


def _threshold_advice(correct: int, threshold: int) -> str:
    if correct >= threshold:
        return (
            f"<p><b>You achieved an accuracy of {correct}% &gt;= {threshold}%. "
            "You may advance to the next lesson!</b></p></html>"
        )
    return (
        f"<p><b>You achieved an accuracy of {correct}% &lt; {threshold}%. "
        "Keep on practicing!</b> Have a look at the mistakes you made above. "
        "If you confused some characters (e.g., s, h & 5) frequently, consider "
        "using the Random tutor to practice only those characters you "
        "confused.</p></html>"
    )


def _lesson_summary(chars: int, words: int, lines: int, threshold: int,
                    lesson: int, lesson_count: int) -> str:
    allowed = chars * (100 - threshold) // 100
    head = f"\n\nSent {chars} chars in {words} words and {lines} lines. "
    if lesson < lesson_count - 1:
        return head + (
            f"If you have less than {allowed} mistakes, you can proceed to lesson {lesson + 1}."
        )
    return head + f"If you have less than {allowed} mistakes, you completed the course!"


def _sample_lesson_index(rng: random.Random, lesson: int, prefer_last: bool) -> int:
    """Pick an index below ``lesson``, optionally favouring the newest entries."""
    if not prefer_last:
        return int(lesson * rng.random())
    value = -1.0
    while not 0 <= value < lesson:
        value = lesson + lesson * math.log(1.0 - rng.random()) / 4
    return int(value)


class KochTutor(Tutor):
    """Sends groups of the symbols learnt so far in the Koch method."""

    def __init__(
        self,
        encoder: Encoder | None,
        lesson: int = 2,
        pref_last_chars: bool = False,
        repeat_last_char: bool = False,
        min_group_size: int = 5,
        max_group_size: int = 5,
        lines: int = 5,
        show_summary: bool = False,
        verify: bool = False,
        hide_output: bool = False,
        success_threshold: int = 90,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(encoder, rng)
        self._lesson = lesson
        self.pref_last_chars = pref_last_chars
        self.repeat_last_char = repeat_last_char
        self.min_group_size = min(min_group_size, max_group_size)
        self.max_group_size = max(min_group_size, max_group_size)
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
        """The current lesson, i.e. the number of symbols in use."""
        return self._lesson

    @lesson.setter
    def lesson(self, value: int) -> None:
        self._lesson = max(2, min(value, len(KOCH_LESSONS)))

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
                               self.success_threshold, self._lesson, len(KOCH_LESSONS))

    def verify(self, text: str) -> VerifyResult:
        err, correct, html = _report("".join(self._send_text), text, self.chars_sent,
                                     self.words_sent, self.lines_sent)
        html += _threshold_advice(correct, self.success_threshold)
        self._emit_verified("koch", self._lesson, correct)
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
        if self.repeat_last_char:
            newest = KOCH_LESSONS[self._lesson - 1]
            for _ in range(5):
                self._text.extend((newest, " "))
            self._text.append("\n")
        self._send_text.clear()
        self.chars_sent = 0
        self.words_sent = 0
        self.lines_sent = 0
        self._next_line()

    def _next_line(self) -> None:
        count = 0
        while count < _SYMBOLS_PER_LINE:
            size = self._rng.randint(self.min_group_size, self.max_group_size)
            for _ in range(size):
                ch = KOCH_LESSONS[
                    _sample_lesson_index(self._rng, self._lesson, self.pref_last_chars)
                ]
                self._text.append(ch)
                self._send_text.append(ch)
                self.chars_sent += 1
            count += size
            self._text.append(" ")
            self._send_text.append(" ")
            self.words_sent += 1
        self._text.extend("=  \n")
        self._send_text.append("\n")
        self._linecount += 1
        self.lines_sent += 1


class RandomTutor(Tutor):
    """Sends groups of characters drawn at random from a character set."""

    def __init__(
        self,
        encoder: Encoder | None,
        chars: Iterable[str] | None = None,
        min_group_size: int = 5,
        max_group_size: int = 5,
        lines: int = 5,
        show_summary: bool = False,
        verify: bool = False,
        hide_output: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(encoder, rng)
        self._chars: list[str] = (
            list(DEFAULT_RANDOM_CHARS) if chars is None else sorted(set(chars))
        )
        self.min_group_size = min_group_size
        self.max_group_size = max_group_size
        self.lines = lines
        self.show_summary = show_summary
        self._verify = verify
        self._hide_output = hide_output
        self._text: deque[str] = deque()
        self._send_text: list[str] = []
        self._linecount = 0
        self.chars_sent = 0
        self.words_sent = 0
        self.lines_sent = 0

    @property
    def chars(self) -> set[str]:
        """The set of characters to practise."""
        return set(self._chars)

    @chars.setter
    def chars(self, value: Iterable[str]) -> None:
        self._chars = sorted(set(value))

    def needs_decoder(self) -> bool:
        return False

    def is_verifying(self) -> bool:
        return self._verify

    def is_output_hidden(self) -> bool:
        return self._hide_output

    def summary(self) -> str:
        if not self.show_summary:
            return ""
        lines = self.lines_sent - 1
        chars = self.chars_sent - 3 - lines
        return f"\n\nSent {chars} chars in {self.words_sent} words and {lines} lines."

    def verify(self, text: str) -> VerifyResult:
        err, correct, html = _report("".join(self._send_text), text, self.chars_sent,
                                     self.words_sent, self.lines_sent)
        self._emit_verified("rand", len(self._chars), correct)
        return VerifyResult(mistakes=err, accuracy=correct, summary=html)

    def next_char(self) -> str:
        if not self._chars:
            return "\0"
        if not self._text and self._linecount == self.lines:
            self.reset()
        elif not self._text:
            self._next_line()
        return self._text.popleft()

    def at_end(self) -> bool:
        return (not self._text and self.lines == self._linecount) or not self._chars

    def reset(self) -> None:
        self._text.clear()
        self._send_text.clear()
        if not self._chars:
            return
        self._linecount = 0
        self.chars_sent = self.words_sent = self.lines_sent = 0
        self._text.extend("vvv\n")
        self._next_line()

    def _next_line(self) -> None:
        count = 0
        while count < _SYMBOLS_PER_LINE:
            size = self._rng.randint(self.min_group_size, self.max_group_size)
            for _ in range(size):
                ch = self._chars[self._rng.randrange(len(self._chars))]
                self._text.append(ch)
                self._send_text.append(ch)
                self.chars_sent += 1
            count += size
            self._text.append(" ")
            self._send_text.append(" ")
            self.words_sent += 1
        self._text.extend("= \n")
        self._send_text.append("\n")
        self._linecount += 1
        self.lines_sent += 1