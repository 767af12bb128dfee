"""Grid to mini-notation generator.

The inverse of ``drumgrid.grid.parse_pattern``: turns the edited grid back
into notation for the audio engine, preferring the most compact form for
each layer::

	hits on 0, 2, 4 ... 14      ->  "hh*8"
	a single hit on step 0      ->  "bd ~ ~ ~"
	anything else               ->  "~ [~ ~ cp ~] ~ cp"  (one token per beat)

Only the hit pattern survives a round trip; the author's original spelling
does not.
"""

from __future__ import annotations

import typing

import drumgrid.constants
import drumgrid.mini_notation

if typing.TYPE_CHECKING:
	from drumgrid.grid import Grid, Layer


def _evenly_spaced (hits: typing.List[int], step_count: int) -> bool:

	"""True when ``hits`` is exactly what ``sound*len(hits)`` expands to."""

	count = len(hits)

	return hits == [drumgrid.mini_notation.span_boundary(i, step_count, count) for i in range(count)]


def _beat_token (sound: str, beat: typing.Sequence[bool]) -> str:

	if not any(beat):
		return "~"

	if beat[0] and not any(beat[1:]):
		return sound

	return "[" + " ".join(sound if on else "~" for on in beat) + "]"


def generate_layer (layer: "Layer", step_count: int) -> str:

	"""
	Notation for one layer with at least one hit.

	Parameters:
		layer: The layer to render; its mute flag is not consulted.
		step_count: Length of the layer's step sequence.
	"""

	hits = layer.hits
	beats_per_bar = drumgrid.constants.BEATS_PER_BAR

	if len(hits) >= 2 and _evenly_spaced(hits, step_count):
		return f"{layer.sound}*{len(hits)}"

	if hits == [0]:
		return " ".join([layer.sound] + ["~"] * (beats_per_bar - 1))

	steps_per_beat = step_count // beats_per_bar

	return " ".join(
		_beat_token(layer.sound, layer.steps[beat * steps_per_beat:(beat + 1) * steps_per_beat])
		for beat in range(beats_per_bar)
	)


def generate (grid: "Grid") -> str:

	"""
	Render a grid as polyphonic mini-notation.

	Muted layers and layers without hits are left out.  When nothing is
	left, the explicit silent bar ``"~ ~ ~ ~"`` is returned.

	Example:
		```python
		generate(open_grid("bd ~ bd ~, ~ cp ~ ~, hh*8"))
		# "bd*2, ~ cp ~ ~, hh*8"
		```
	"""

	active = [layer for layer in grid.layers if not layer.muted and any(layer.steps)]

	if not active:
		return drumgrid.constants.REST_NOTATION

	return ", ".join(generate_layer(layer, grid.step_count) for layer in active)
