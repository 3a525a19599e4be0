from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from termui.terminal import SelectionMode

MAX_CLICK_COUNT = 3
DEFAULT_MULTI_CLICK_WINDOW = 0.5  # seconds

_SELECTION_BY_COUNT = {
    1: SelectionMode.CHAR,
    2: SelectionMode.WORD,
    3: SelectionMode.LINE,
}


@dataclass
class ClickState:
    last_x: int = -1
    last_y: int = -1
    last_time: Optional[float] = None
    count: int = 0


class ClickClassifier:
    """
    Turns consecutive left-button presses into a click count (1, 2 or 3).

    A press on the same cell as the previous one, less than `window` seconds
    later, bumps the count (capped at 3). Anything else starts over at 1.
    """
    def __init__(self, window: float = DEFAULT_MULTI_CLICK_WINDOW, state: Optional[ClickState] = None):
        self.window = max(0.0, float(window))
        self.state = state or ClickState()

    def classify(self, cell_x: int, cell_y: int, now: float) -> int:
        st = self.state
        same_cell = (st.last_x, st.last_y) == (cell_x, cell_y)
        in_time = st.last_time is not None and (now - st.last_time) < self.window

        if same_cell and in_time:
            st.count = min(st.count + 1, MAX_CLICK_COUNT)
        else:
            st.count = 1

        st.last_x, st.last_y = cell_x, cell_y
        st.last_time = now
        return st.count

    @property
    def count(self) -> int:
        return self.state.count

    @property
    def last_cell(self) -> tuple[int, int]:
        return self.state.last_x, self.state.last_y


def selection_mode_for(count: int) -> SelectionMode:
    """char / word / line granularity for a click count."""
    return _SELECTION_BY_COUNT[max(1, min(MAX_CLICK_COUNT, count))]
