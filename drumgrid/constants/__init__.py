"""Constants for drumgrid.

This package contains:

- ``drumgrid.constants`` - Grid and timing constants used by the compiler
  and the playhead
- ``drumgrid.constants.presets`` - The built-in preset pattern catalog
- ``drumgrid.constants.sounds`` - The sound picker catalog and per-sound
  randomisation densities
"""

# One bar of 4/4 is four beats of four sixteenth-note subdivisions.
BEATS_PER_BAR = 4
STEPS_PER_BAR = 16

# The audio engine counts time in cycles; one cycle is always one bar of
# sixteenth notes, whatever the grid length.
STEPS_PER_CYCLE = 16

MAX_STEP_COUNT = 32

DEFAULT_BPM = 120.0

# Tempo assumed by the fallback clock when the supplied BPM is unusable.
FALLBACK_CYCLES_PER_SECOND = 0.5

# Notation emitted when no layer is audible.
REST_NOTATION = "~ ~ ~ ~"

# Rows seeded into an editor opened on an empty pattern (kick, clap, hat).
DEFAULT_SOUNDS = ("bd", "cp", "hh")

# Default when a layer names no sound at all.
DEFAULT_SOUND = "bd"
