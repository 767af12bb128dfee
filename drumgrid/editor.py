"""Drum editor session.

``DrumEditor`` owns the grid of one open editing surface.  It seeds the grid
from incoming notation, applies edits, emits the regenerated notation to the
audio engine, and runs the playhead while playback is active.

Edits are debounced: each mutation (re)schedules a single emission after
``auto_apply_delay`` seconds on the running event loop, so a burst of
toggles produces one notation update.

```python
editor = drumgrid.editor.DrumEditor(on_pattern_change=engine.set_pattern)
editor.open("bd ~ bd ~, ~ cp ~ ~", bars=1)
editor.toggle_step(0, 14)
editor.play()
...
editor.close()
```
"""

import asyncio
import logging
import random
import threading
import typing

import drumgrid.config
import drumgrid.constants.sounds
import drumgrid.grid
import drumgrid.playhead


logger = logging.getLogger(__name__)


PatternChangeCallback = typing.Callable[[str, int], typing.Any]


class DrumEditor:

	"""
	A single editing session over a ``Grid``.

	Parameters:
		config: Tempo, timing and catalogs (``EditorConfig()`` by default).
		on_pattern_change: Called with ``(notation, bars)`` whenever the grid
			is applied.
		cycle_position: Optional accessor for the audio engine's cycle
			position; drives the playhead when given.
	"""

	def __init__ (
		self,
		config: typing.Optional[drumgrid.config.EditorConfig] = None,
		on_pattern_change: typing.Optional[PatternChangeCallback] = None,
		cycle_position: typing.Optional[typing.Callable[[], float]] = None,
	) -> None:

		self.config = config if config is not None else drumgrid.config.EditorConfig()
		self.on_pattern_change = on_pattern_change

		self._lock = threading.Lock()
		self._grid: typing.Optional[drumgrid.grid.Grid] = None
		self._pending_apply: typing.Optional[asyncio.TimerHandle] = None

		self.playhead = drumgrid.playhead.PlayheadMapper(
			bpm = self.config.bpm,
			cycle_position = cycle_position,
			frame_interval = self.config.frame_interval,
		)

	# ------------------------------------------------------------------
	# Lifecycle
	# ------------------------------------------------------------------

	@property
	def is_open (self) -> bool:

		return self._grid is not None

	@property
	def grid (self) -> drumgrid.grid.Grid:

		"""The current grid. Raises ``RuntimeError`` when the editor is closed."""

		if self._grid is None:
			raise RuntimeError("Editor is not open")

		return self._grid

	def open (self, notation: str, bars: int = 1) -> drumgrid.grid.Grid:

		"""Seed the grid from ``notation`` (or default rows when it has no layers)."""

		self.stop()
		self._cancel_pending_apply()

		with self._lock:
			self._grid = drumgrid.grid.open_grid(notation, bars)
			self.playhead.step_count = self._grid.step_count

		logger.info(f"Editor opened: {len(self._grid.layers)} rows, {self._grid.step_count} steps")

		return self._grid

	def close (self) -> None:

		"""Stop playback, drop any pending emission and discard the grid."""

		self.stop()
		self._cancel_pending_apply()

		with self._lock:
			was_open = self._grid is not None
			self._grid = None

		if was_open:
			logger.info("Editor closed")

	# ------------------------------------------------------------------
	# Emission
	# ------------------------------------------------------------------

	def apply (self) -> str:

		"""Generate notation for the current grid and pass it to ``on_pattern_change``."""

		self._cancel_pending_apply()

		grid = self.grid
		notation = grid.to_notation()

		logger.debug(f"Applying pattern ({grid.bars} bars): {notation}")

		if self.on_pattern_change is not None:
			self.on_pattern_change(notation, grid.bars)

		return notation

	def _cancel_pending_apply (self) -> None:

		if self._pending_apply is not None:
			self._pending_apply.cancel()
			self._pending_apply = None

	def _emit (self) -> None:

		"""Apply, logging a failing callback instead of raising it into the caller."""

		self._pending_apply = None

		if not self.is_open:
			return

		try:
			self.apply()
		except Exception:
			logger.exception("Pattern change callback failed")

	def _schedule_apply (self) -> None:

		"""Emit now, or after ``auto_apply_delay`` when an event loop is running."""

		self._cancel_pending_apply()

		if self.config.auto_apply_delay <= 0:
			self._emit()
			return

		try:
			loop = asyncio.get_running_loop()
		except RuntimeError:
			self._emit()
			return

		self._pending_apply = loop.call_later(self.config.auto_apply_delay, self._emit)

	# ------------------------------------------------------------------
	# Mutations
	# ------------------------------------------------------------------

	def _update (self, change: typing.Callable[[drumgrid.grid.Grid], drumgrid.grid.Grid]) -> drumgrid.grid.Grid:

		"""Replace the grid with ``change(grid)`` as one step, then schedule emission."""

		with self._lock:
			if self._grid is None:
				raise RuntimeError("Editor is not open")
			self._grid = change(self._grid)
			self.playhead.step_count = self._grid.step_count
			grid = self._grid

		self._schedule_apply()

		return grid

	def toggle_step (self, row: int, col: int) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.toggle_step(row, col))

	def toggle_muted (self, row: int) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.toggle_muted(row))

	def set_muted (self, row: int, value: bool) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.set_muted(row, value))

	def remove_row (self, row: int) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.remove_row(row))

	def add_row (self, sound: str) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.add_row(sound))

	def resize_step_count (self, count: int) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.resize_step_count(count))

	def clear_all (self) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.clear_all())

	def randomize (self, rng: typing.Optional[random.Random] = None) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.randomize(rng))

	def load_preset (self, name: str) -> drumgrid.grid.Grid:
		return self._update(lambda grid: grid.load_preset(name, self.config.presets))

	def available_sounds (self) -> typing.List[drumgrid.constants.sounds.SoundOption]:

		"""Catalog sounds that no row is using yet."""

		used = {layer.sound for layer in self.grid.layers}

		return [option for option in self.config.sounds if option.sound not in used]

	# ------------------------------------------------------------------
	# Playback
	# ------------------------------------------------------------------

	@property
	def playhead_column (self) -> int:

		return self.playhead.column

	def play (self, loop: typing.Optional[asyncio.AbstractEventLoop] = None) -> None:

		"""Start the playhead. Requires an open editor and a running (or given) loop."""

		self.playhead.step_count = self.grid.step_count
		self.playhead.start(loop)

	def stop (self) -> None:

		self.playhead.stop()
