"""Real-time playhead for the step grid.

Maps a playback clock onto the grid column that is currently sounding.  Two
clock sources are supported:

- **Driven** - an accessor supplied by the audio engine returns the number of
  elapsed cycles (a float, one cycle = one bar of 16 steps).
- **Fallback** - with no accessor, the position is derived from wall-clock
  time since ``start()`` and the tempo.

The mapper recomputes the position once per display frame with a
self-rescheduling ``loop.call_later()`` callback.  The pending callback is
cancelled by ``stop()``, so always stop the mapper (or use it as a context
manager) when playback ends or the editor closes:

```python
async def preview (grid):
	with drumgrid.playhead.PlayheadMapper(grid.step_count, bpm=96, on_step=print):
		await asyncio.sleep(4)
```
"""

import asyncio
import logging
import math
import time
import types
import typing

import drumgrid.constants


logger = logging.getLogger(__name__)


DEFAULT_FRAME_INTERVAL = 1.0 / 60.0


def driven_position (cycle: float, step_count: int) -> float:

	"""Fractional step for an engine position of ``cycle`` elapsed cycles."""

	return (cycle * drumgrid.constants.STEPS_PER_CYCLE) % step_count


def fallback_position (elapsed_seconds: float, bpm: float, step_count: int) -> float:

	"""
	Fractional step after ``elapsed_seconds`` of playback at ``bpm``.

	A cycle is one bar of four beats, so ``bpm / 60 / 4`` cycles pass each
	second.  Non-positive tempos fall back to half a cycle per second.
	"""

	if bpm > 0:
		cycles_per_second = bpm / 60.0 / drumgrid.constants.BEATS_PER_BAR
	else:
		cycles_per_second = drumgrid.constants.FALLBACK_CYCLES_PER_SECOND

	ms_per_step = 1000.0 / (cycles_per_second * drumgrid.constants.STEPS_PER_CYCLE)

	return (elapsed_seconds * 1000.0 / ms_per_step) % step_count


def highlighted_column (position: float, step_count: int) -> int:

	"""The grid column to highlight for a fractional step position."""

	return math.floor(position) % step_count


class PlayheadMapper:

	"""
	Tracks the playing column of a grid, once per display frame.

	Parameters:
		step_count: Number of columns in the grid. May be updated while running.
		bpm: Tempo for the fallback clock.
		cycle_position: Optional accessor returning elapsed cycles from the
			audio engine. When given, the mapper runs in driven mode.
		on_step: Optional callback receiving the new column whenever the
			highlighted column changes.
		frame_interval: Seconds between position updates.
		clock: Monotonic time source in seconds (``time.perf_counter``).
	"""

	def __init__ (
		self,
		step_count: int = drumgrid.constants.STEPS_PER_BAR,
		bpm: float = drumgrid.constants.DEFAULT_BPM,
		cycle_position: typing.Optional[typing.Callable[[], float]] = None,
		on_step: typing.Optional[typing.Callable[[int], typing.Any]] = None,
		frame_interval: float = DEFAULT_FRAME_INTERVAL,
		clock: typing.Callable[[], float] = time.perf_counter,
	) -> None:

		if frame_interval <= 0:
			raise ValueError("frame_interval must be positive")

		self.step_count = step_count
		self.bpm = bpm
		self.cycle_position = cycle_position
		self.on_step = on_step
		self.frame_interval = frame_interval

		self._clock = clock
		self._start_time = 0.0
		self._running = False
		self._loop: typing.Optional[asyncio.AbstractEventLoop] = None
		self._handle: typing.Optional[asyncio.Handle] = None
		self._last_column: typing.Optional[int] = None

		self.position = 0.0

	@property
	def driven (self) -> bool:

		"""True when following the audio engine's cycle position."""

		return self.cycle_position is not None

	@property
	def running (self) -> bool:

		return self._running

	@property
	def column (self) -> int:

		"""The column currently highlighted."""

		return highlighted_column(self.position, self.step_count)

	def read_position (self) -> float:

		"""Compute the fractional step position right now."""

		if self.cycle_position is not None:
			return driven_position(self.cycle_position(), self.step_count)

		return fallback_position(self._clock() - self._start_time, self.bpm, self.step_count)

	def start (self, loop: typing.Optional[asyncio.AbstractEventLoop] = None) -> None:

		"""
		Begin per-frame updates on ``loop`` (the running loop by default).

		The fallback clock restarts from column 0 on every start.
		"""

		if self._running:
			return

		self._loop = loop if loop is not None else asyncio.get_running_loop()
		self._start_time = self._clock()
		self._last_column = None
		self.position = 0.0
		self._running = True
		self._handle = self._loop.call_soon(self._tick)

		logger.info(f"Playhead started ({'driven' if self.driven else f'fallback at {self.bpm:.2f} BPM'})")

	def stop (self) -> None:

		"""Cancel the pending frame callback and return the playhead to column 0."""

		if self._handle is not None:
			self._handle.cancel()
			self._handle = None

		if self._running:
			logger.info("Playhead stopped")

		self._running = False
		self._loop = None
		self._last_column = None
		self.position = 0.0

	def _tick (self) -> None:

		"""Update the position for one frame, then schedule the next frame."""

		self._handle = None

		if not self._running or self._loop is None:
			return

		try:
			self.position = self.read_position()
		except Exception:
			logger.exception("Cycle position accessor failed - playhead not updated this frame")
		else:
			column = self.column

			if column != self._last_column:
				self._last_column = column

				if self.on_step is not None:
					try:
						self.on_step(column)
					except Exception:
						logger.exception(f"Playhead step callback failed at column {column}")

		if self._running:
			self._handle = self._loop.call_later(self.frame_interval, self._tick)

	def __enter__ (self) -> "PlayheadMapper":

		self.start()
		return self

	def __exit__ (
		self,
		exc_type: typing.Optional[typing.Type[BaseException]],
		exc: typing.Optional[BaseException],
		traceback: typing.Optional[types.TracebackType],
	) -> None:

		self.stop()
