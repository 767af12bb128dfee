"""Drum sound catalog and randomisation densities.

Sound identifiers are the short sample names understood by the audio engine
(``bd``, ``hh`` ...).  Sound classes are matched case-insensitively, so a row
named ``BD`` randomises like a kick.
"""

import dataclasses
import typing


@dataclasses.dataclass (frozen=True)
class SoundOption:

	"""A sound that can be added as a new row, with its display label."""

	sound: str
	label: str


AVAILABLE_SOUNDS: typing.Tuple[SoundOption, ...] = (
	SoundOption("bd", "Kick"),
	SoundOption("sd", "Snare"),
	SoundOption("cp", "Clap"),
	SoundOption("hh", "Hi-Hat"),
	SoundOption("oh", "Open Hat"),
	SoundOption("rim", "Rim"),
	SoundOption("lt", "Lo Tom"),
	SoundOption("mt", "Mid Tom"),
	SoundOption("ht", "Hi Tom"),
	SoundOption("cy", "Cymbal"),
	SoundOption("cb", "Cowbell"),
	SoundOption("cl", "Clave"),
	SoundOption("sh", "Shaker"),
	SoundOption("ma", "Maracas"),
	SoundOption("cr", "Crash"),
	SoundOption("rd", "Ride"),
)

KICK_SOUNDS = frozenset({"bd", "kick"})
SNARE_SOUNDS = frozenset({"cp", "sd", "snare", "clap"})
HAT_SOUNDS = frozenset({"hh", "ch"})
OPEN_HAT_SOUNDS = frozenset({"oh"})

# (accented probability, other probability)
KICK_DENSITY = (0.70, 0.12)
SNARE_DENSITY = (0.85, 0.06)
HAT_DENSITY = 0.50
OPEN_HAT_DENSITY = 0.10
OTHER_DENSITY = 0.18


def hit_probability (sound: str, index: int) -> float:

	"""Probability that ``randomize()`` turns on step ``index`` of a row playing ``sound``.

	Kicks lean on every beat (``index % 4 == 0``), snares and claps on the
	backbeat (``index % 8 == 4``), closed hats are dense, open hats sparse,
	and anything else is medium-sparse.
	"""

	key = sound.lower()

	if key in KICK_SOUNDS:
		accent, other = KICK_DENSITY
		return accent if index % 4 == 0 else other

	if key in SNARE_SOUNDS:
		accent, other = SNARE_DENSITY
		return accent if index % 8 == 4 else other

	if key in HAT_SOUNDS:
		return HAT_DENSITY

	if key in OPEN_HAT_SOUNDS:
		return OPEN_HAT_DENSITY

	return OTHER_DENSITY
