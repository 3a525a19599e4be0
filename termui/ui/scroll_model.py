from dataclasses import dataclass

@dataclass
class ScrollbarState:
    position: int = 0
    max_position: int = 0

    def set(self, max_position: int, position: int) -> None:
        position = max(0, int(position))
        max_position = int(max_position)
        if max_position <= 0:
            max_position = position
        if position > max_position:
            position = max_position
        self.max_position = max_position
        self.position = position
