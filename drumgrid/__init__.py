
"""
drumgrid - a two-way compiler between rhythm mini-notation and a drum step grid.

Mini-notation is the compact pattern language used by live-coding audio
engines::

	"bd [~ bd] ~ ~, ~ cp ~ ~, hh*8"

drumgrid quantizes such a pattern onto a fixed grid of 16 (one bar) or 32
(two bars) sixteenth-note steps for visual editing, and turns the edited grid
back into the most compact notation it can find.

What it covers:

- **Parsing.** Rests (``~``, ``-``), ``[...]`` subdivision groups, ``*N``
  repetition, ``<...>`` alternation (first choice only) and comma-separated
  polyphonic layers.  Malformed input never raises - unknown words become a
  single hit and unbalanced brackets are absorbed.
- **Generation.** Evenly spaced hits become ``sound*N``, a lone downbeat
  becomes ``sound ~ ~ ~``, everything else is written beat by beat.
- **Editing.** An immutable ``Grid`` with total mutations: toggle, mute,
  add/remove rows, resize, clear, sound-aware randomize and presets.
- **Playhead.** Maps the audio engine's cycle position (or a BPM clock) onto
  the sounding column, once per display frame, on asyncio.

Minimal example:

    ```python
    import drumgrid

    grid = drumgrid.open_grid("bd ~ bd ~, ~ cp ~ ~, hh*8")
    grid = grid.toggle_step(0, 14)
    print(grid.to_notation())   # "bd ~ bd [~ ~ bd ~], ~ cp ~ ~, hh*8"
    ```

Package-level exports: ``Grid``, ``Layer``, ``DrumEditor``, ``EditorConfig``,
``PlayheadMapper``, ``open_grid``, ``parse_pattern``, ``generate``,
``expand``, ``load_config``.
"""

import drumgrid.config
import drumgrid.editor
import drumgrid.generator
import drumgrid.grid
import drumgrid.mini_notation
import drumgrid.playhead


Grid = drumgrid.grid.Grid
Layer = drumgrid.grid.Layer
DrumEditor = drumgrid.editor.DrumEditor
EditorConfig = drumgrid.config.EditorConfig
PlayheadMapper = drumgrid.playhead.PlayheadMapper
open_grid = drumgrid.grid.open_grid
parse_pattern = drumgrid.grid.parse_pattern
generate = drumgrid.generator.generate
expand = drumgrid.mini_notation.expand
load_config = drumgrid.config.load_config
