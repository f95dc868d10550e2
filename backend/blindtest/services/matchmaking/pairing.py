from typing import Optional, Tuple

from blindtest.models import PlayerHandle


class MatchmakingQueue:
    """Single waiting slot.

    A second arrival is always paired with the waiting player straight away,
    so the slot never needs to hold more than one handle. Callers serialize
    access (see MatchEngine).
    """

    def __init__(self):
        self._waiting: Optional[PlayerHandle] = None

    @property
    def waiting(self) -> Optional[PlayerHandle]:
        return self._waiting

    def __len__(self) -> int:
        return 0 if self._waiting is None else 1

    def __contains__(self, handle: PlayerHandle) -> bool:
        return self._waiting is not None and self._waiting.sid == handle.sid

    def arrive(self, handle: PlayerHandle) -> Optional[Tuple[PlayerHandle, PlayerHandle]]:
        """Pair `handle` with the waiting player, or make it the waiting one.

        Returns ``(waiting, handle)`` when a pair is formed, None when `handle`
        now occupies the slot.
        """
        if self._waiting is not None and self._waiting.sid != handle.sid:
            opponent, self._waiting = self._waiting, None
            return opponent, handle
        self._waiting = handle
        return None

    def remove(self, handle: PlayerHandle) -> bool:
        if handle in self:
            self._waiting = None
            return True
        return False
