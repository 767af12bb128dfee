"""Editor configuration.

Defaults come from ``drumgrid.constants``.  A YAML file can override the
tempo, timing and the static catalogs::

	bpm: 96
	auto_apply_delay: 0.15
	frame_rate: 60
	presets:
	  - name: Rock
	    pattern: "bd ~ bd ~, ~ ~ cp ~, hh*8"
	sounds:
	  - id: bd
	    label: Kick
"""

import dataclasses
import logging
import os
import typing

import yaml

import drumgrid.constants
import drumgrid.constants.presets
import drumgrid.constants.sounds


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class EditorConfig:

	"""
	Settings for a ``DrumEditor``.

	Parameters:
		bpm: Tempo used by the fallback playhead clock.
		auto_apply_delay: Seconds of inactivity before an edit is emitted as
			notation (0 emits immediately).
		frame_rate: Playhead updates per second.
		presets: Preset catalog offered by ``load_preset``.
		sounds: Sound catalog offered when adding rows.
	"""

	bpm: float = drumgrid.constants.DEFAULT_BPM
	auto_apply_delay: float = 0.15
	frame_rate: float = 60.0
	presets: typing.Tuple[drumgrid.constants.presets.PresetPattern, ...] = drumgrid.constants.presets.DRUM_PRESETS
	sounds: typing.Tuple[drumgrid.constants.sounds.SoundOption, ...] = drumgrid.constants.sounds.AVAILABLE_SOUNDS

	def __post_init__ (self) -> None:
		if self.auto_apply_delay < 0:
			raise ValueError("auto_apply_delay cannot be negative")
		if self.frame_rate <= 0:
			raise ValueError("frame_rate must be positive")

	@property
	def frame_interval (self) -> float:

		return 1.0 / self.frame_rate


def _parse_presets (entries: typing.Any) -> typing.Tuple[drumgrid.constants.presets.PresetPattern, ...]:

	if not isinstance(entries, list):
		raise ValueError("presets must be a list of {name, pattern} entries")

	presets = []

	for entry in entries:
		if not isinstance(entry, dict) or "name" not in entry or "pattern" not in entry:
			raise ValueError(f"Invalid preset entry: {entry!r}")
		presets.append(drumgrid.constants.presets.PresetPattern(str(entry["name"]), str(entry["pattern"])))

	return tuple(presets)


def _parse_sounds (entries: typing.Any) -> typing.Tuple[drumgrid.constants.sounds.SoundOption, ...]:

	if not isinstance(entries, list):
		raise ValueError("sounds must be a list of {id, label} entries")

	sounds = []

	for entry in entries:
		if not isinstance(entry, dict) or "id" not in entry:
			raise ValueError(f"Invalid sound entry: {entry!r}")
		sound = str(entry["id"])
		sounds.append(drumgrid.constants.sounds.SoundOption(sound, str(entry.get("label", sound))))

	return tuple(sounds)


def _number (data: dict, key: str, default: float) -> float:

	"""Read a numeric setting; a missing or null value gives ``default``."""

	value = data.get(key)

	if value is None:
		return default

	try:
		return float(value)
	except (TypeError, ValueError) as e:
		raise ValueError(f"Config key {key!r} must be a number, got {value!r}") from e


def load_config (config_path: str = "drumgrid.yaml") -> EditorConfig:

	"""
	Load editor settings from a YAML file.

	A missing file (or an empty one) gives the defaults.  Unknown keys are
	ignored with a warning; malformed catalogs and non-numeric values raise
	``ValueError``.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return EditorConfig()

	with open(config_path, "r") as f:
		data = yaml.safe_load(f) or {}

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	known = {"bpm", "auto_apply_delay", "frame_rate", "presets", "sounds"}

	for key in sorted(set(data) - known):
		logger.warning(f"Ignoring unknown config key {key!r} in {config_path}")

	config = EditorConfig(
		bpm = _number(data, "bpm", drumgrid.constants.DEFAULT_BPM),
		auto_apply_delay = _number(data, "auto_apply_delay", 0.15),
		frame_rate = _number(data, "frame_rate", 60.0),
	)

	if "presets" in data:
		config.presets = _parse_presets(data["presets"])

	if "sounds" in data:
		config.sounds = _parse_sounds(data["sounds"])

	return config
