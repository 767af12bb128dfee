import typing

import pytest


class FakeClock:

	"""Manually advanced time source for the playhead fallback clock."""

	def __init__ (self, start: float = 100.0) -> None:

		self.now = start

	def __call__ (self) -> float:

		return self.now

	def advance (self, seconds: float) -> None:

		"""Move time forward by ``seconds``."""

		self.now += seconds


class CycleSource:

	"""Stand-in for the audio engine's cycle-position accessor."""

	def __init__ (self, cycle: float = 0.0) -> None:

		self.cycle = cycle
		self.calls = 0

	def __call__ (self) -> float:

		self.calls += 1
		return self.cycle


@pytest.fixture
def fake_clock () -> FakeClock:

	"""A clock frozen until the test advances it."""

	return FakeClock()


@pytest.fixture
def cycle_source () -> CycleSource:

	"""A settable cycle-position accessor that counts how often it is read."""

	return CycleSource()


def hits (steps: typing.Sequence[bool]) -> typing.List[int]:

	"""Indexes of the True entries in a step sequence."""

	return [i for i, on in enumerate(steps) if on]
