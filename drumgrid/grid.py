"""Editable drum step grid.

A ``Grid`` is an immutable snapshot: every mutation returns a new grid and
leaves the original untouched, so a half-applied edit is never observable.
All mutations are total - out-of-range rows, columns and unsupported sizes
are ignored and the grid comes back unchanged.

```python
grid = drumgrid.grid.open_grid("bd ~ bd ~, ~ cp ~ ~, hh*8")
grid = grid.toggle_step(0, 14).resize_step_count(32)
grid.to_notation()
```
"""

from __future__ import annotations

import dataclasses
import logging
import random
import typing

import drumgrid.constants
import drumgrid.constants.presets
import drumgrid.constants.sounds
import drumgrid.generator
import drumgrid.mini_notation


logger = logging.getLogger(__name__)


@dataclasses.dataclass (frozen=True)
class Layer:

	"""
	One percussion voice: a sound and its hit pattern.

	Muting keeps the steps intact but leaves the layer out of the generated
	notation and the hit count.
	"""

	sound: str
	steps: typing.Tuple[bool, ...]
	muted: bool = False

	@property
	def hits (self) -> typing.List[int]:

		"""Indexes of the steps that are on, in order."""

		return [i for i, on in enumerate(self.steps) if on]


def _empty_steps (count: int) -> typing.Tuple[bool, ...]:

	return (False,) * count


def _is_valid_step_count (count: int) -> bool:

	return count > 0 and count % drumgrid.constants.STEPS_PER_BAR == 0


def parse_pattern (text: str, steps: int) -> typing.List[Layer]:

	"""
	Parse a polyphonic pattern into one unmuted layer per comma-separated voice.

	Parameters:
		text: Mini-notation, e.g. ``"bd ~ bd ~, ~ cp ~ ~, hh*8"``.
		steps: Number of steps to quantize every layer onto.

	Returns:
		The parsed layers, or an empty list for empty or whitespace-only text
		(the caller decides which rows to seed instead).
	"""

	if not text or not text.strip():
		return []

	layers = [
		Layer(
			sound = drumgrid.mini_notation.extract_sound_name(layer_text),
			steps = tuple(drumgrid.mini_notation.expand(layer_text, steps)),
		)
		for layer_text in drumgrid.mini_notation.split_top_level_by_comma(text)
	]

	logger.debug(f"Parsed {len(layers)} layers over {steps} steps from {text!r}")

	return layers


@dataclasses.dataclass (frozen=True)
class Grid:

	"""
	The rhythm being edited: ordered layers over a shared step count.

	Parameters:
		layers: Rows in display order.
		step_count: Steps per layer - a positive multiple of 16
			(16 = one bar of sixteenth notes, 32 = two bars).
	"""

	layers: typing.Tuple[Layer, ...] = ()
	step_count: int = drumgrid.constants.STEPS_PER_BAR

	def __post_init__ (self) -> None:

		if not _is_valid_step_count(self.step_count):
			raise ValueError(f"step_count must be a positive multiple of {drumgrid.constants.STEPS_PER_BAR}, got {self.step_count}")

		for layer in self.layers:
			if len(layer.steps) != self.step_count:
				raise ValueError(f"Layer {layer.sound!r} has {len(layer.steps)} steps, expected {self.step_count}")

	# ------------------------------------------------------------------
	# Derived values
	# ------------------------------------------------------------------

	@property
	def bars (self) -> int:

		"""Number of bars the grid spans."""

		return self.step_count // drumgrid.constants.STEPS_PER_BAR

	@property
	def steps_per_beat (self) -> int:

		return self.step_count // drumgrid.constants.BEATS_PER_BAR

	@property
	def hit_count (self) -> int:

		"""Total hits across all unmuted layers."""

		return sum(len(layer.hits) for layer in self.layers if not layer.muted)

	def to_notation (self) -> str:

		"""Render the grid as mini-notation (see ``drumgrid.generator.generate``)."""

		return drumgrid.generator.generate(self)

	# ------------------------------------------------------------------
	# Mutations
	# ------------------------------------------------------------------

	def _has_row (self, row: int) -> bool:

		return 0 <= row < len(self.layers)

	def _replace_layer (self, row: int, layer: Layer) -> "Grid":

		layers = list(self.layers)
		layers[row] = layer
		return dataclasses.replace(self, layers=tuple(layers))

	def toggle_step (self, row: int, col: int) -> "Grid":

		"""Flip one cell. Out-of-range positions leave the grid unchanged."""

		if not self._has_row(row) or not 0 <= col < self.step_count:
			return self

		layer = self.layers[row]
		steps = list(layer.steps)
		steps[col] = not steps[col]

		return self._replace_layer(row, dataclasses.replace(layer, steps=tuple(steps)))

	def set_muted (self, row: int, value: bool) -> "Grid":

		if not self._has_row(row):
			return self

		return self._replace_layer(row, dataclasses.replace(self.layers[row], muted=value))

	def toggle_muted (self, row: int) -> "Grid":

		if not self._has_row(row):
			return self

		return self.set_muted(row, not self.layers[row].muted)

	def remove_row (self, row: int) -> "Grid":

		if not self._has_row(row):
			return self

		return dataclasses.replace(self, layers=self.layers[:row] + self.layers[row + 1:])

	def add_row (self, sound: str) -> "Grid":

		"""Append an empty, unmuted layer for ``sound``."""

		layer = Layer(sound=sound, steps=_empty_steps(self.step_count))

		return dataclasses.replace(self, layers=self.layers + (layer,))

	def resize_step_count (self, count: int) -> "Grid":

		"""
		Change the grid length, padding every layer with rests or truncating it.

		Shrinking drops any hits beyond the new length; growing back does not
		restore them.  Counts that are not a positive multiple of 16 are
		ignored.
		"""

		if not _is_valid_step_count(count):
			logger.debug(f"Ignoring unsupported step count {count}")
			return self

		layers = tuple(
			dataclasses.replace(layer, steps=(layer.steps + _empty_steps(count))[:count])
			for layer in self.layers
		)

		return Grid(layers=layers, step_count=count)

	def clear_all (self) -> "Grid":

		"""Turn every step off, keeping the rows and their mute flags."""

		layers = tuple(
			dataclasses.replace(layer, steps=_empty_steps(self.step_count))
			for layer in self.layers
		)

		return dataclasses.replace(self, layers=layers)

	def randomize (self, rng: typing.Optional[random.Random] = None) -> "Grid":

		"""
		Fill every layer with a random pattern shaped by its sound.

		Each cell is drawn independently with a probability from
		``drumgrid.constants.sounds.hit_probability`` - kicks favour the
		beat, snares and claps the backbeat, hats are dense.

		Parameters:
			rng: Optional random source for repeatable results.
		"""

		if rng is None:
			rng = random.Random()

		layers = tuple(
			dataclasses.replace(layer, steps=tuple(
				rng.random() < drumgrid.constants.sounds.hit_probability(layer.sound, i)
				for i in range(self.step_count)
			))
			for layer in self.layers
		)

		return dataclasses.replace(self, layers=layers)

	def load_pattern (self, text: str) -> "Grid":

		"""Replace every layer with the layers parsed from ``text``."""

		return dataclasses.replace(self, layers=tuple(parse_pattern(text, self.step_count)))

	def load_preset (
		self,
		name: str,
		presets: typing.Iterable[drumgrid.constants.presets.PresetPattern] = drumgrid.constants.presets.DRUM_PRESETS,
	) -> "Grid":

		"""Replace every layer with a catalog preset. Unknown names leave the grid unchanged."""

		preset = drumgrid.constants.presets.find_preset(name, presets)

		if preset is None:
			logger.warning(f"Unknown preset {name!r} ignored")
			return self

		logger.info(f"Loaded preset: {preset.name}")

		return self.load_pattern(preset.notation)


def step_count_for_bars (bars: int) -> int:

	"""Initial step count for a pattern spanning ``bars`` bars (16 or 32)."""

	if bars > 1:
		return min(bars * drumgrid.constants.STEPS_PER_BAR, drumgrid.constants.MAX_STEP_COUNT)

	return drumgrid.constants.STEPS_PER_BAR


def open_grid (notation: str, bars: int = 1) -> Grid:

	"""
	Create the grid for a freshly opened editor.

	The notation is parsed over 16 steps per bar (at most 32).  When it
	yields no layers, three empty rows are seeded instead: kick, clap, hat.
	"""

	step_count = step_count_for_bars(bars)
	layers = parse_pattern(notation, step_count)

	if not layers:
		layers = [Layer(sound=sound, steps=_empty_steps(step_count)) for sound in drumgrid.constants.DEFAULT_SOUNDS]

	return Grid(layers=tuple(layers), step_count=step_count)
