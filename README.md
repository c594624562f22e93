# kochmorse

A library for Morse code (CW) practice. It has three parts.

- **Tutors** produce practice text one character at a time and hand each
  character to an encoder:
  - `kochmorse.tutor.KochTutor` uses the Koch method.
  - `kochmorse.tutor.RandomTutor` sends random character groups.
  - `kochmorse.texttutors.WordsworthTutor` sends common CW words, lesson by lesson.
  - `kochmorse.texttutors.GenTextTutor` sends text from a rule file.
  - `kochmorse.texttutors.TXTutor` sends nothing and only marks that user input is expected.
- **Copy verification** is in `kochmorse.textcompare`. It compares the sent text with the
  copied text and returns the positions of wrong or missing characters. The
  Koch, Random and Wordsworth tutors use it in `verify()`. That method returns a
  `VerifyResult` holding the mistake count, the accuracy in percent and an HTML
  summary that marks every wrong character.
- **A rule-based text generator**, `kochmorse.textgen.TextGen`. It reads an XML rule
  file, or a plain `.txt` file, and produces random practice text such as
  QSOs, Q-codes or call signs.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Generating text from a rule file

```
kochmorse-textgen rules.xml
```

This prints one generated text to standard output. If no file is given, or the
file cannot be read or parsed, the command prints a message to standard error
and exits with status 1.

A rule file looks like this:

```xml
<rules>
  <rule id="call">
    <any-letter/><any-letter/><any-number/><any-letter/><any-letter/>
  </rule>
  <var id="dx"><apply rule="call"/></var>
  <t>cq cq de </t><ref var="dx"/><t> </t><ref var="dx"/><bk/>
  <one-of>
    <t w="2">pse k</t>
    <t>k</t>
  </one-of>
</rules>
```

The document element must be `rules`. Bare text between rule elements is
ignored, so put literal text inside `t`.

Supported elements:

- `t`: literal text. It may contain `one-of`, `if`, `opt`, `ref`, `apply`,
  `any-letter`, `any-number`, prosigns and pauses.
- `rule id="..."`: defines a named rule. It produces nothing where it is defined.
- `apply rule="..."`: inserts a named rule that was defined earlier.
- `var id="..."`: sets a variable to the text of its content. It produces no text.
- `ref var="..."`: inserts the value of a variable. An undefined variable inserts nothing.
- `if var="..." [matches="..."]`: includes its content only if the variable is
  defined and, with `matches`, holds exactly that value.
- `opt p="..."`: includes its content with probability `p`. The default is 0.5.
- `one-of`: picks one `i` (rules) or `t` (text) item at random, weighted by
  `w`. The default weight is 1.
- `one-of-zipf exp="..."`: picks one `i` or `t` item. The item at rank `n` has
  weight `1 / n ** exp`, and the default `exp` is 1.
- `rep min="..." [max="..."]`: repeats its content a random number of times
  between `min` and `max`, both included.
- `any-letter` and `any-number`: insert one random lower-case letter or one digit.
- Prosigns: `bt` (`=`), `ar` (`+`), `bk` (U+2417) and `sk` (U+2403).
- `p` inserts a tab, which is a pause. `stop` inserts three spaces and a newline.
- `load file="..."`: adds the rules of another XML file, or the content of a
  `.txt` file. A relative name that does not exist is looked up next to the
  file that is being loaded.

A malformed or invalid description raises `kochmorse.textgen.TextGenError`.

## Using the library

```python
from kochmorse.textgen import TextGen
from kochmorse.textcompare import text_compare, word_compare

gen = TextGen.from_string("<rules><t>cq de </t><any-letter/></rules>")
print(gen.generate({}))

print(text_compare("cq de ab1cde", "cq de ab1cdf"))  # [11]
print(word_compare("test", "tst"))                    # [1]
```

The rule classes in `kochmorse.rules` can also be combined directly, for
example `ListRule([TextRule("cq "), AnyLetterRule()])`. `default_context()` returns a context with the variables `ToY` (season)
and `ToD` (greeting) set.

### Tutors

```python
import random
from kochmorse.tutor import Encoder, KochTutor

encoder = Encoder()
tutor = KochTutor(encoder, lesson=5, lines=2, show_summary=True, rng=random.Random(1))
tutor.finished_listeners.append(lambda: print("done"))

tutor.start()                      # resets the session and sends the first character
while not tutor.at_end():
    tutor.on_char_sent(encoder.sent[-1])
tutor.on_char_sent(encoder.sent[-1])   # notifies the finished listeners

print("".join(encoder.sent))
print(tutor.summary())
result = tutor.verify("kmrs ...")  # VerifyResult(mistakes, accuracy, summary)
```

The base `Encoder` only records the characters it receives in `encoder.sent`.
To make it key something, subclass it and override `start`, `stop` and `send`.
The code that drives the encoder then calls the tutor's `on_char_sent` once each
character has been keyed. The tutor answers with the next character until the
session ends. `verified_listeners` receive the tutor's name, its lesson (or, for
the random tutor, the number of characters in use) and the accuracy after each
`verify()` call.

## What this package does not do

This package does not produce or play audio, and it does not decode Morse
keyed by the user. `TXTutor` sends nothing and leaves the input to other code.
There is no graphical interface, no interactive QSO chat partner, and no
persistent storage of settings or scores. Applications have to provide these
themselves.