from __future__ import annotations

import shutil
import signal
import sys
from dataclasses import dataclass
from typing import Callable

from kyrics.state.models import KyricsUiState, LineUiState


CSI = "\x1b["


def _sgr(*codes: int) -> str:
    return CSI + ";".join(str(c) for c in codes) + "m"


@dataclass(frozen=True, slots=True)
class Theme:
    title: str = _sgr(36, 1)  # cyan bold
    current: str = _sgr(32, 1)  # green bold
    near: str = _sgr(37)  # white
    dim: str = _sgr(90)  # bright black
    accompaniment: str = _sgr(3)  # italic
    warning: str = _sgr(33, 1)  # yellow bold
    reset: str = _sgr(0)


# upcoming lines at or above this opacity are drawn normal, below it dimmed
NEAR_OPACITY = 0.45


class AnsiRenderer:
    """
    Terminal preview of a KyricsUiState. Line emphasis follows the computed
    line states: playing lines bright, near upcoming lines normal, the rest dim.
    """

    def __init__(self, use_alt_screen: bool = True, theme: Theme | None = None):
        self.use_alt_screen = use_alt_screen
        self.theme = theme or Theme()
        self._entered = False
        self._resize_handler: Callable[..., None] | None = None
        self._last_render_args: tuple[str, KyricsUiState, int] | None = None

    def __enter__(self):
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exit()

    def enter(self) -> None:
        if self._entered:
            return
        if self.use_alt_screen:
            sys.stdout.write(CSI + "?1049h")  # alt screen
        sys.stdout.write(CSI + "?25l")  # hide cursor
        sys.stdout.write(CSI + "H" + CSI + "2J")  # home + clear
        sys.stdout.flush()
        self._entered = True

        def _on_resize(*_args) -> None:
            if self._last_render_args:
                self.render(*self._last_render_args)

        self._resize_handler = _on_resize
        if hasattr(signal, "SIGWINCH"):
            signal.signal(signal.SIGWINCH, _on_resize)

    def exit(self) -> None:
        if not self._entered:
            return
        if self._resize_handler and hasattr(signal, "SIGWINCH"):
            signal.signal(signal.SIGWINCH, signal.SIG_DFL)
        self._resize_handler = None
        sys.stdout.write(self.theme.reset)
        sys.stdout.write(CSI + "?25h")  # show cursor
        if self.use_alt_screen:
            sys.stdout.write(CSI + "?1049l")  # normal screen
        sys.stdout.flush()
        self._entered = False
        self._last_render_args = None

    def style_for(self, ls: LineUiState, is_accompaniment: bool = False) -> str:
        if ls.is_playing:
            style = self.theme.current
        elif ls.is_upcoming and ls.opacity >= NEAR_OPACITY:
            style = self.theme.near
        else:
            style = self.theme.dim
        if is_accompaniment:
            style += self.theme.accompaniment
        return style

    def frame(self, title: str, state: KyricsUiState, context_lines: int = 2, rows: int = 24) -> list[str]:
        body_rows = max(rows - 1, 1)
        lines = state.lines
        anchor = state.current_line_index
        if anchor is None:
            # between lines: keep the next upcoming line in view
            anchor = next(
                (i for i in range(len(lines)) if state.get_line_state(i).is_upcoming),
                len(lines) - 1 if lines else 0,
            )

        start = max(anchor - context_lines, 0)
        end = min(start + body_rows, len(lines))
        start = max(end - body_rows, 0)

        out = [f"{self.theme.title}♫ {title} ♫{self.theme.reset}"]
        for i in range(start, end):
            ln = lines[i]
            style = self.style_for(state.get_line_state(i), ln.is_accompaniment)
            out.append(f"{style}{ln.text}{self.theme.reset}")
        return out

    def render(self, title: str, state: KyricsUiState, context_lines: int = 2) -> None:
        # kept for SIGWINCH redraw
        self._last_render_args = (title, state, context_lines)

        _cols, rows = shutil.get_terminal_size(fallback=(80, 24))
        out = self.frame(title, state, context_lines=context_lines, rows=rows)

        sys.stdout.write(CSI + "H" + CSI + "2J")
        sys.stdout.write("\n".join(out))
        sys.stdout.write(self.theme.reset)
        sys.stdout.flush()
