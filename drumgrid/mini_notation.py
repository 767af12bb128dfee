"""Mini-notation tokenizer, token tree and step expander.

Mini-notation is the compact rhythm language understood by the audio engine:

- `bd sd hh`: elements separated by spaces share the span equally.
- `[a b]`: groups elements into a single subdivided slot.
- `~` or `-` (any run of dashes): a rest.
- `x*4`: repeats ``x`` four times across its span.
- `<a b>`: alternation; a static grid only ever shows the first choice.
- `a, b`: commas separate polyphonic layers (see ``drumgrid.grid.parse_pattern``).

Notation text is first turned into a small tree of token variants by
``parse_token()``, then ``expand()`` quantizes the tree onto a fixed number
of boolean steps.  Nothing in this module raises on malformed input:
unknown tokens become a single hit and unbalanced brackets are absorbed.
"""

import dataclasses
import re
import typing

import drumgrid.constants


_OPENING_BRACKETS = "[<{"
_CLOSING_BRACKETS = "]>}"

_REPEAT_PATTERN = re.compile(r"^(.+)\*(\d+)$", re.DOTALL)
_REST_PATTERN = re.compile(r"^(~|-+)$")
_BRACKET_CHARS = re.compile(r"[\[\]<>{}]")
_REPEAT_SUFFIX = re.compile(r"\*\d+")


# ---------------------------------------------------------------------------
# Token variants
# ---------------------------------------------------------------------------

@dataclasses.dataclass (frozen=True)
class Rest:

	"""Silence for the whole span."""


@dataclasses.dataclass (frozen=True)
class Atomic:

	"""A single sound (or any unrecognised word) - one hit at the start of its span."""

	text: str


@dataclasses.dataclass (frozen=True)
class Repeated:

	"""``base*count`` - the base played ``count`` times across the span."""

	base: "Token"
	count: int


@dataclasses.dataclass (frozen=True)
class Bracketed:

	"""``[inner]`` - pure grouping; the inner token fills the same span."""

	inner: "Token"


@dataclasses.dataclass (frozen=True)
class Alternation:

	"""``<a b c>`` - one choice per cycle."""

	choices: typing.Tuple["Token", ...]


@dataclasses.dataclass (frozen=True)
class Sequence:

	"""Space-separated elements dividing the span between them."""

	elements: typing.Tuple["Token", ...]


Token = typing.Union[Rest, Atomic, Repeated, Bracketed, Alternation, Sequence]


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def _split_top_level (text: str, is_separator: typing.Callable[[str], bool]) -> typing.List[str]:

	"""Split ``text`` on separator characters that sit outside every bracket pair."""

	parts: typing.List[str] = []
	current: typing.List[str] = []
	depth = 0

	for char in text:

		if char in _OPENING_BRACKETS:
			depth += 1
		elif char in _CLOSING_BRACKETS:
			depth -= 1

		if depth == 0 and is_separator(char):
			parts.append("".join(current))
			current = []
		else:
			current.append(char)

	parts.append("".join(current))

	return [part.strip() for part in parts if part.strip()]


def split_top_level_by_comma (text: str) -> typing.List[str]:

	"""
	Split a pattern into its comma-separated layers.

	Commas nested inside ``[]``, ``<>`` or ``{}`` do not separate layers.
	Empty segments are dropped.

	Example:
		```python
		split_top_level_by_comma("bd [~ bd,x], ~ cp")
		# ["bd [~ bd,x]", "~ cp"]
		```
	"""

	return _split_top_level(text, lambda char: char == ",")


def split_top_level_by_whitespace (text: str) -> typing.List[str]:

	"""
	Split a layer into its whitespace-separated elements, keeping bracket groups whole.

	Example:
		```python
		split_top_level_by_whitespace("bd [~ bd] ~")
		# ["bd", "[~ bd]", "~"]
		```
	"""

	return _split_top_level(text, str.isspace)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def is_rest (text: str) -> bool:

	"""True for ``~`` and for any run of ``-`` characters."""

	return _REST_PATTERN.match(text) is not None


def _is_wrapped (text: str, opening: str, closing: str) -> bool:

	"""True when the bracket opening ``text`` is the one closed by its last character.

	``[a] [b]`` starts and ends with brackets but is two groups, not one.
	"""

	if len(text) < 2 or text[0] != opening or text[-1] != closing:
		return False

	depth = 0

	for index, char in enumerate(text):

		if char in _OPENING_BRACKETS:
			depth += 1
		elif char in _CLOSING_BRACKETS:
			depth -= 1

		if depth == 0:
			return index == len(text) - 1

	return False


def parse_token (text: str) -> Token:

	"""
	Classify mini-notation text into a token tree.

	Rules are tried in order: rest, trailing ``*N`` repetition, ``[...]``
	group, ``<...>`` alternation, multi-element sequence, and finally a
	single atomic word.  A trailing ``*N`` binds to everything before it,
	so ``bd ~ hh*2`` is the three-element group played twice.
	"""

	text = text.strip()

	if not text or is_rest(text):
		return Rest()

	match = _REPEAT_PATTERN.match(text)

	if match:
		return Repeated(parse_token(match.group(1)), int(match.group(2)))

	if _is_wrapped(text, "[", "]"):
		return Bracketed(parse_token(text[1:-1]))

	if _is_wrapped(text, "<", ">"):
		choices = split_top_level_by_whitespace(text[1:-1])
		return Alternation(tuple(parse_token(choice) for choice in choices))

	elements = split_top_level_by_whitespace(text)

	if len(elements) > 1:
		return Sequence(tuple(parse_token(element) for element in elements))

	return Atomic(text)


# ---------------------------------------------------------------------------
# Expansion
# ---------------------------------------------------------------------------

def span_boundary (index: int, total: int, parts: int) -> int:

	"""
	Return ``round(index * total / parts)`` rounded half up.

	Every subdivision boundary in the compiler goes through here so that the
	parser and the notation generator agree exactly.  Python's ``round()``
	rounds half to even and would move boundaries that fall on exact halves.
	"""

	return (2 * index * total + parts) // (2 * parts)


def _place (target: typing.List[bool], offset: int, values: typing.List[bool]) -> None:

	"""Copy ``values`` into ``target`` at ``offset``, clipping at the end of ``target``."""

	for i, value in enumerate(values):
		if offset + i >= len(target):
			break
		target[offset + i] = value


def _expand_token (token: Token, steps: int) -> typing.List[bool]:

	result = [False] * steps

	if isinstance(token, Rest):
		return result

	if isinstance(token, Atomic):
		if steps > 0:
			result[0] = True
		return result

	if isinstance(token, Bracketed):
		return _expand_token(token.inner, steps)

	if isinstance(token, Alternation):
		# Only the first choice can be shown on a static grid.
		if not token.choices:
			return result
		return _expand_token(token.choices[0], steps)

	if isinstance(token, Repeated):

		if token.count <= 0 or steps == 0:
			return result

		if token.count >= steps:
			# Every sub-span is at most one step wide and each step starts exactly one of them.
			return _expand_token(token.base, 1) * steps

		if isinstance(token.base, Atomic):
			for i in range(token.count):
				result[span_boundary(i, steps, token.count)] = True
			return result

		for i in range(token.count):
			start = span_boundary(i, steps, token.count)
			end = span_boundary(i + 1, steps, token.count)
			_place(result, start, _expand_token(token.base, end - start))

		return result

	if isinstance(token, Sequence):

		count = len(token.elements)

		for i, element in enumerate(token.elements):
			start = span_boundary(i, steps, count)
			end = span_boundary(i + 1, steps, count)
			if end > start:
				_place(result, start, _expand_token(element, end - start))

		return result

	raise TypeError(f"Unknown token type: {type(token).__name__}")


def expand (token: typing.Union[str, Token], steps: int) -> typing.List[bool]:

	"""
	Quantize a mini-notation token onto ``steps`` boolean slots.

	Parameters:
		token: Notation text or an already parsed token tree.
		steps: Number of slots to fill. Negative values are treated as zero.

	Returns:
		A list of exactly ``steps`` booleans; ``True`` marks a hit.

	Example:
		```python
		expand("bd*4", 16)      # hits at 0, 4, 8, 12
		expand("bd [~ bd]", 4)  # [True, False, False, True]
		```
	"""

	steps = max(steps, 0)

	if isinstance(token, str):
		token = parse_token(token)

	return _expand_token(token, steps)


def extract_sound_name (layer: str) -> str:

	"""
	Return the drum sound a layer plays: its first word that is not a rest.

	Brackets and ``*N`` suffixes are ignored.  A layer made only of rests
	defaults to ``"bd"``.
	"""

	stripped = _REPEAT_SUFFIX.sub("", _BRACKET_CHARS.sub(" ", layer))

	for word in stripped.split():
		if not is_rest(word):
			return word

	return drumgrid.constants.DEFAULT_SOUND
