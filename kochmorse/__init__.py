"""Morse code tutors, rule-based practice text generation and copy verification."""

__version__ = "0.1.0"

__all__ = ["textcompare", "rules", "textgen", "textgen_cli", "tutor", "texttutors"]