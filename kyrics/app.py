from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

from kyrics.config import DEFAULT_CONFIG, KyricsConfig, PreviewConfig
from kyrics.lines import time_range
from kyrics.model import Line
from kyrics.render.ansi import AnsiRenderer
from kyrics.state.holder import StateHolder
from kyrics.state.models import KyricsUiState

logger = logging.getLogger(__name__)


def preview(
    lines: Sequence[Line],
    *,
    title: str,
    preview_cfg: PreviewConfig,
    config: KyricsConfig = DEFAULT_CONFIG,
    renderer: AnsiRenderer | None = None,
    start_ms: int = 0,
    speed: float = 1.0,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Play lyrics against a simulated clock (no audio):
    clock -> position -> StateHolder -> render when the snapshot changes.

    Returns the number of frames drawn.
    """
    rng = time_range(lines)
    if rng is None:
        logger.info("Nothing to preview: no lines")
        return 0
    stop_ms = rng[1] + preview_cfg.tail_ms

    renderer = renderer or AnsiRenderer(use_alt_screen=preview_cfg.use_alt_screen)
    holder = StateHolder(config)
    frames = 0
    last_index: object = object()

    def _draw(state: KyricsUiState) -> None:
        nonlocal frames, last_index
        # the terminal only changes when the current line does
        if state.current_line_index == last_index:
            return
        last_index = state.current_line_index
        renderer.render(title, state, context_lines=preview_cfg.context_lines)
        frames += 1

    unsubscribe = holder.subscribe(_draw)
    tick_s = 1.0 / max(preview_cfg.refresh_hz, 1.0)
    t0 = clock()

    renderer.enter()
    try:
        holder.update(lines, start_ms)
        while True:
            pos_ms = start_ms + int((clock() - t0) * 1000 * speed)
            holder.update_time(pos_ms)
            if pos_ms >= stop_ms:
                break
            sleep(tick_s)
    finally:
        unsubscribe()
        renderer.exit()
    return frames
