"""Built-in drum preset catalog.

Each preset is a complete polyphonic pattern in mini-notation, one
comma-separated layer per drum sound.  The catalog is static: load it into a
grid with ``Grid.load_preset(name)``.
"""

import dataclasses
import typing


@dataclasses.dataclass (frozen=True)
class PresetPattern:

	"""A named, immutable mini-notation pattern."""

	name: str
	notation: str


DRUM_PRESETS: typing.Tuple[PresetPattern, ...] = (
	PresetPattern("Rock",       "bd ~ bd ~, ~ ~ cp ~, hh*8"),
	PresetPattern("Pop",        "bd ~ ~ bd ~ ~ bd ~, ~ ~ ~ ~ cp ~ ~ ~, hh*8"),
	PresetPattern("Hip Hop",    "bd ~ [~ bd] ~, ~ cp ~ ~, hh*8"),
	PresetPattern("4-on-Floor", "bd*4, ~ cp ~ cp, [hh hh hh oh]*4"),
	PresetPattern("Boom Bap",   "bd ~ ~ ~, ~ ~ cp ~, hh*4"),
	PresetPattern("Trap",       "bd ~ ~ [~ bd], ~ ~ cp ~, hh*16"),
	PresetPattern("Breakbeat",  "[bd ~] ~ [~ bd] ~, ~ cp ~ [~ cp], hh*4"),
	PresetPattern("Minimal",    "bd ~ ~ ~, ~ ~ cp ~, [~ hh]*4"),
	PresetPattern("Reggaeton",  "bd ~ ~ bd, ~ ~ cp ~, [~ hh]*8"),
	PresetPattern("Shuffle",    "bd [~ bd] bd ~, ~ [~ cp] ~ ~, [hh ~ hh]*4"),
)


def find_preset (name: str, presets: typing.Iterable[PresetPattern] = DRUM_PRESETS) -> typing.Optional[PresetPattern]:

	"""Return the preset called ``name``, or ``None`` when the catalog has no such entry."""

	for preset in presets:
		if preset.name == name:
			return preset

	return None
