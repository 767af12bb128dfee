import asyncio
import logging
import random

import drumgrid


logging.basicConfig(level=logging.INFO)


def send_to_engine (notation: str, bars: int) -> None:
	# Stand-in for the audio engine: just show what it would receive.
	print(f"[{bars} bar] {notation}")


def show_column (column: int) -> None:
	print(f"  playhead -> {column}")


async def main () -> None:

	editor = drumgrid.DrumEditor(
		config = drumgrid.EditorConfig(bpm=128, auto_apply_delay=0.15),
		on_pattern_change = send_to_engine,
	)

	editor.open("bd [~ bd] ~ ~, ~ cp ~ ~, hh*8")

	# A burst of edits is emitted once, after the debounce delay.
	editor.toggle_step(0, 10)
	editor.toggle_step(1, 12)
	editor.add_row("oh")
	editor.toggle_step(3, 14)
	await asyncio.sleep(0.3)

	editor.resize_step_count(32)
	editor.randomize(random.Random(7))
	await asyncio.sleep(0.3)

	editor.playhead.on_step = show_column
	editor.play()
	await asyncio.sleep(1.0)

	editor.close()


if __name__ == "__main__":
	asyncio.run(main())
