from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ResetTapCounter:
    """Counts reset taps and fires once the count passes ``threshold``.

    A single stray tap never resets the game. A deliberate burst of
    ``threshold + 1`` taps does, and the count starts over afterwards.
    """

    threshold: int = 10
    _count: int = field(init=False, default=0, repr=False)

    def register(self) -> bool:
        self._count += 1
        if self._count > self.threshold:
            self._count = 0
            return True
        return False

    def reset(self) -> None:
        self._count = 0

    @property
    def count(self) -> int:
        return self._count
