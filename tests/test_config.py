import logging
import pathlib

import pytest

import drumgrid.config
import drumgrid.constants.presets
import drumgrid.constants.sounds


def test_missing_file_gives_defaults (tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:

	"""A missing config file is reported and the built-in catalogs are used."""

	with caplog.at_level(logging.WARNING, logger="drumgrid.config"):
		config = drumgrid.config.load_config(str(tmp_path / "missing.yaml"))

	assert "not found" in caplog.text
	assert config.bpm == 120.0
	assert config.presets == drumgrid.constants.presets.DRUM_PRESETS
	assert config.sounds == drumgrid.constants.sounds.AVAILABLE_SOUNDS


def test_empty_file_gives_defaults (tmp_path: pathlib.Path) -> None:

	"""An empty YAML document is treated as no overrides."""

	path = tmp_path / "drumgrid.yaml"
	path.write_text("")

	assert drumgrid.config.load_config(str(path)) == drumgrid.config.EditorConfig()


def test_overrides_from_yaml (tmp_path: pathlib.Path) -> None:

	"""Tempo, timing and both catalogs can be replaced."""

	path = tmp_path / "drumgrid.yaml"
	path.write_text(
		"bpm: 96\n"
		"auto_apply_delay: 0.3\n"
		"frame_rate: 30\n"
		"presets:\n"
		"  - name: Rock\n"
		"    pattern: \"bd ~ bd ~, ~ ~ cp ~, hh*8\"\n"
		"sounds:\n"
		"  - id: bd\n"
		"    label: Kick\n"
		"  - id: tb\n"
	)

	config = drumgrid.config.load_config(str(path))

	assert config.bpm == 96.0
	assert config.auto_apply_delay == 0.3
	assert config.frame_interval == pytest.approx(1 / 30)
	assert config.presets == (drumgrid.constants.presets.PresetPattern("Rock", "bd ~ bd ~, ~ ~ cp ~, hh*8"),)
	assert config.sounds == (
		drumgrid.constants.sounds.SoundOption("bd", "Kick"),
		drumgrid.constants.sounds.SoundOption("tb", "tb"),
	)


def test_unknown_keys_warn (tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:

	"""Unrecognised keys are ignored with a warning."""

	path = tmp_path / "drumgrid.yaml"
	path.write_text("bpm: 100\nswing: 57\n")

	with caplog.at_level(logging.WARNING, logger="drumgrid.config"):
		config = drumgrid.config.load_config(str(path))

	assert config.bpm == 100.0
	assert "swing" in caplog.text


@pytest.mark.parametrize("body", [
	"presets: Rock\n",
	"presets:\n  - name: Rock\n",
	"sounds:\n  - label: Kick\n",
	"- bpm\n",
	"frame_rate: 0\n",
	"auto_apply_delay: -1\n",
	"bpm: fast\n",
	"frame_rate: [60]\n",
])
def test_malformed_config_raises (tmp_path: pathlib.Path, body: str) -> None:

	"""Broken catalogs and values are rejected with ValueError."""

	path = tmp_path / "drumgrid.yaml"
	path.write_text(body)

	with pytest.raises(ValueError):
		drumgrid.config.load_config(str(path))


def test_null_values_give_defaults (tmp_path: pathlib.Path) -> None:

	"""Keys present but left empty fall back to their defaults."""

	path = tmp_path / "drumgrid.yaml"
	path.write_text("bpm:\nframe_rate: null\nauto_apply_delay: ~\n")

	assert drumgrid.config.load_config(str(path)) == drumgrid.config.EditorConfig()
