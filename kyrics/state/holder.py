from __future__ import annotations

import logging
from typing import Callable, Sequence

from kyrics.config import DEFAULT_CONFIG, KyricsConfig
from kyrics.model import Line
from kyrics.state.calculator import calculate_state
from kyrics.state.models import KyricsUiState

logger = logging.getLogger(__name__)

Listener = Callable[[KyricsUiState], None]


class StateHolder:
    """
    Owns the UI state for one lyrics session.

    Every recalculation replaces `state` with a new snapshot and notifies
    subscribers; calls that would not change anything keep the old object.
    Single writer, no locking.
    """

    def __init__(self, config: KyricsConfig = DEFAULT_CONFIG):
        self._config = config
        self._state = KyricsUiState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> KyricsUiState:
        return self._state

    @property
    def config(self) -> KyricsConfig:
        return self._config

    @property
    def current_line_index(self) -> int | None:
        return self._state.current_line_index

    @property
    def current_line(self) -> Line | None:
        return self._state.current_line

    @property
    def is_initialized(self) -> bool:
        return self._state.is_initialized

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, state: KyricsUiState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def set_lines(self, lines: Sequence[Line]) -> None:
        self._replace(calculate_state(lines, self._state.current_time_ms, self._config))

    def update_time(self, t_ms: int) -> None:
        if t_ms == self._state.current_time_ms:
            return
        self._replace(calculate_state(self._state.lines, t_ms, self._config))

    def update(self, lines: Sequence[Line], t_ms: int) -> None:
        lines = tuple(lines)
        st = self._state
        if st.is_initialized and t_ms == st.current_time_ms and lines == st.lines:
            return
        self._replace(calculate_state(lines, t_ms, self._config))

    def update_config(self, config: KyricsConfig) -> None:
        if config == self._config:
            return
        self._config = config
        if self._state.lines:
            self._replace(calculate_state(self._state.lines, self._state.current_time_ms, config))

    def reset(self) -> None:
        logger.debug("Resetting lyrics state")
        self._replace(KyricsUiState())
