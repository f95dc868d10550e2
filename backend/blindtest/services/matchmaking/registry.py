from typing import TYPE_CHECKING, Dict, Iterator, Optional

if TYPE_CHECKING:
    from .match import Match


class MatchRegistry:
    """Active matches, indexed by match id and by participant sid."""

    def __init__(self):
        self._matches: Dict[str, 'Match'] = {}
        self._by_sid: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._matches)

    def __contains__(self, match_id: str) -> bool:
        return match_id in self._matches

    def __iter__(self) -> Iterator['Match']:
        return iter(list(self._matches.values()))

    def add(self, match: 'Match') -> None:
        for player in match.players:
            if player.sid in self._by_sid:
                raise ValueError(f"player {player.sid} is already in match {self._by_sid[player.sid]}")
        self._matches[match.id] = match
        for player in match.players:
            self._by_sid[player.sid] = match.id

    def remove(self, match_id: str) -> Optional['Match']:
        match = self._matches.pop(match_id, None)
        if match is None:
            return None
        for player in match.players:
            if self._by_sid.get(player.sid) == match_id:
                del self._by_sid[player.sid]
        return match

    def get(self, match_id: str) -> Optional['Match']:
        return self._matches.get(match_id)

    def match_for(self, sid: str) -> Optional['Match']:
        match_id = self._by_sid.get(sid)
        return self._matches.get(match_id) if match_id else None
