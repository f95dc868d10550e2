from dataclasses import dataclass, field
from typing import Any, Dict

# Match phases, in the order a match walks through them
LOBBY = 'lobby'
GUESSING = 'guessing'
REVEAL = 'reveal'
ENDED = 'ended'


@dataclass
class PlayerHandle:
    """A connected participant, keyed by its Socket.IO session id.

    The profile is whatever the client sent with ``identify``; it is passed
    back to clients untouched.
    """
    sid: str
    profile: Dict[str, Any] = field(default_factory=dict)
    score: int = 0

    @property
    def name(self) -> str:
        return str(self.profile.get('name') or self.sid)

    def to_dict(self):
        return {**self.profile, 'score': self.score}
