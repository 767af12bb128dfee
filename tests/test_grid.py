import random

import pytest

import conftest
import drumgrid.constants.presets
import drumgrid.grid


def _grid (*rows: str, step_count: int = 16) -> drumgrid.grid.Grid:

	"""Build a grid from notation, one layer per argument."""

	return drumgrid.grid.Grid(
		layers = tuple(drumgrid.grid.parse_pattern(", ".join(rows), step_count)),
		step_count = step_count,
	)


def test_parse_pattern_layers () -> None:

	"""Each comma-separated layer becomes a row with its own sound."""

	layers = drumgrid.grid.parse_pattern("bd ~ bd ~, ~ cp ~ ~, hh*8", 16)

	assert [layer.sound for layer in layers] == ["bd", "cp", "hh"]
	assert layers[0].hits == [0, 8]
	assert layers[1].hits == [4]
	assert layers[2].hits == [0, 2, 4, 6, 8, 10, 12, 14]
	assert all(len(layer.steps) == 16 and not layer.muted for layer in layers)


def test_parse_pattern_empty_text () -> None:

	"""Empty or blank notation yields no layers."""

	assert drumgrid.grid.parse_pattern("", 16) == []
	assert drumgrid.grid.parse_pattern("  \n ", 16) == []


def test_open_grid_seeds_default_rows () -> None:

	"""An editor opened on an empty pattern gets empty kick, clap and hat rows."""

	grid = drumgrid.grid.open_grid("")

	assert [layer.sound for layer in grid.layers] == ["bd", "cp", "hh"]
	assert grid.step_count == 16
	assert grid.hit_count == 0


def test_open_grid_step_count_from_bars () -> None:

	"""One bar is 16 steps; longer patterns are capped at 32."""

	assert drumgrid.grid.open_grid("bd*4", bars=1).step_count == 16
	assert drumgrid.grid.open_grid("bd*4", bars=2).step_count == 32
	assert drumgrid.grid.open_grid("bd*4", bars=4).step_count == 32
	assert drumgrid.grid.open_grid("bd*4", bars=0).step_count == 16


def test_grid_rejects_stale_layer_lengths () -> None:

	"""Constructing a grid whose layers disagree with its step count fails."""

	layer = drumgrid.grid.Layer(sound="bd", steps=(False,) * 16)

	with pytest.raises(ValueError):
		drumgrid.grid.Grid(layers=(layer,), step_count=32)

	with pytest.raises(ValueError):
		drumgrid.grid.Grid(layers=(), step_count=12)


def test_toggle_step () -> None:

	"""Toggling flips one cell and leaves the original grid untouched."""

	grid = _grid("bd ~ ~ ~")
	toggled = grid.toggle_step(0, 5)

	assert toggled.layers[0].hits == [0, 5]
	assert grid.layers[0].hits == [0]
	assert toggled.toggle_step(0, 5) == grid


@pytest.mark.parametrize("row, col", [(-1, 0), (1, 0), (0, -1), (0, 16)])
def test_toggle_step_out_of_range_is_noop (row: int, col: int) -> None:

	"""Invalid positions are ignored."""

	grid = _grid("bd ~ ~ ~")

	assert grid.toggle_step(row, col) == grid


def test_mute_keeps_steps () -> None:

	"""Muting never touches a layer's steps but removes it from the hit count."""

	grid = _grid("bd*4", "hh*8")
	muted = grid.set_muted(1, True)

	assert muted.layers[1].muted
	assert muted.layers[1].steps == grid.layers[1].steps
	assert muted.hit_count == 4
	assert muted.toggle_muted(1) == grid
	assert grid.set_muted(7, True) == grid
	assert grid.toggle_muted(-1) == grid


def test_add_and_remove_rows () -> None:

	"""New rows are empty and sized to the grid; removal keeps order."""

	grid = _grid("bd*4", "cp", step_count=32).add_row("oh")

	assert [layer.sound for layer in grid.layers] == ["bd", "cp", "oh"]
	assert grid.layers[2].steps == (False,) * 32

	removed = grid.remove_row(1)

	assert [layer.sound for layer in removed.layers] == ["bd", "oh"]
	assert removed.remove_row(5) == removed


def test_resize_pads_and_truncates () -> None:

	"""Growing pads with rests; shrinking drops hits beyond the new length."""

	grid = _grid("bd*4", "hh*8")
	grown = grid.resize_step_count(32)

	assert grown.step_count == 32
	assert all(len(layer.steps) == 32 for layer in grown.layers)
	assert grown.layers[0].hits == [0, 4, 8, 12]

	# Lossless when every hit fits in the smaller size.
	assert grown.resize_step_count(16) == grid

	wide = grown.toggle_step(0, 20)
	shrunk = wide.resize_step_count(16)

	assert shrunk.layers[0].hits == [0, 4, 8, 12]
	assert shrunk.resize_step_count(32).layers[0].hits == [0, 4, 8, 12]


@pytest.mark.parametrize("count", [0, -16, 12, 20])
def test_resize_to_unsupported_size_is_noop (count: int) -> None:

	"""Sizes that are not positive multiples of 16 are ignored."""

	grid = _grid("bd*4")

	assert grid.resize_step_count(count) == grid


def test_clear_all () -> None:

	"""Clearing empties every row but keeps rows and mute flags."""

	grid = _grid("bd*4", "hh*8").set_muted(1, True).clear_all()

	assert [layer.sound for layer in grid.layers] == ["bd", "hh"]
	assert grid.layers[1].muted
	assert all(not any(layer.steps) for layer in grid.layers)


def test_randomize_is_repeatable_with_seed () -> None:

	"""The same seed gives the same pattern; lengths and mutes are kept."""

	grid = drumgrid.grid.open_grid("").set_muted(2, True)

	first = grid.randomize(random.Random(42))
	second = grid.randomize(random.Random(42))

	assert first == second
	assert first.layers[2].muted
	assert all(len(layer.steps) == 16 for layer in first.layers)


def _hit_rate (sound: str, positions: list, trials: int = 2000) -> float:

	rng = random.Random(1234)
	grid = drumgrid.grid.Grid().add_row(sound)
	hits = 0

	for _ in range(trials):
		steps = grid.randomize(rng).layers[0].steps
		hits += sum(steps[i] for i in positions)

	return hits / (trials * len(positions))


def test_randomize_kick_density () -> None:

	"""Kicks land on the beat about 70% of the time and elsewhere about 12%."""

	assert _hit_rate("bd", [0, 4, 8, 12]) == pytest.approx(0.70, abs=0.03)
	assert _hit_rate("KICK", [1, 2, 3, 5, 6, 7]) == pytest.approx(0.12, abs=0.03)


def test_randomize_snare_and_hat_density () -> None:

	"""Snares favour the backbeat; hats and other sounds use flat densities."""

	assert _hit_rate("cp", [4, 12]) == pytest.approx(0.85, abs=0.03)
	assert _hit_rate("Snare", [0, 1, 2, 3]) == pytest.approx(0.06, abs=0.03)
	assert _hit_rate("hh", list(range(16))) == pytest.approx(0.50, abs=0.03)
	assert _hit_rate("oh", list(range(16))) == pytest.approx(0.10, abs=0.03)
	assert _hit_rate("rim", list(range(16))) == pytest.approx(0.18, abs=0.03)


def test_load_preset () -> None:

	"""Presets replace the rows, parsed at the grid's current size."""

	grid = drumgrid.grid.open_grid("", bars=2).load_preset("Hip Hop")

	assert grid.step_count == 32
	assert [layer.sound for layer in grid.layers] == ["bd", "cp", "hh"]
	assert grid.layers[0].hits == [0, 20]
	assert grid.layers[1].hits == [8]


def test_load_preset_unknown_name_is_noop () -> None:

	"""A name missing from the catalog leaves the grid as it was."""

	grid = _grid("bd*4")

	assert grid.load_preset("Polka") == grid


def test_load_preset_custom_catalog () -> None:

	"""A caller-supplied catalog is searched instead of the built-in one."""

	catalog = (drumgrid.constants.presets.PresetPattern("Sparse", "rim ~ ~ ~"),)

	grid = _grid("bd*4").load_preset("Sparse", catalog)

	assert [layer.sound for layer in grid.layers] == ["rim"]
	assert grid.layers[0].hits == [0]


def test_every_builtin_preset_parses () -> None:

	"""All catalog presets produce at least one non-empty layer."""

	for preset in drumgrid.constants.presets.DRUM_PRESETS:
		grid = drumgrid.grid.Grid().load_preset(preset.name)
		assert grid.layers, preset.name
		assert grid.hit_count > 0, preset.name


def test_four_on_floor_hat_layer () -> None:

	"""A repeated group names its layer after its first sound."""

	grid = drumgrid.grid.Grid().load_preset("4-on-Floor")

	assert grid.layers[2].sound == "hh"
	assert conftest.hits(grid.layers[2].steps) == list(range(16))


def test_bars_and_steps_per_beat () -> None:

	"""Derived sizes follow the step count."""

	grid = drumgrid.grid.open_grid("bd", bars=2)

	assert grid.bars == 2
	assert grid.steps_per_beat == 8


def test_load_pattern_replaces_rows () -> None:

	"""Arbitrary notation replaces the rows at the current size."""

	grid = drumgrid.grid.open_grid("bd*4", bars=2).load_pattern("~ sd, <oh hh>*2")

	assert grid.step_count == 32
	assert [layer.sound for layer in grid.layers] == ["sd", "oh"]
	assert grid.layers[0].hits == [16]
	assert grid.layers[1].hits == [0, 16]
	assert grid.load_pattern("").layers == ()
