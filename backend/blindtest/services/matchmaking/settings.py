from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class MatchSettings:
    catalog_size: int = 300
    max_rounds: int = 15
    lobby_countdown: float = 3
    guess_duration: float = 20
    reveal_duration: float = 8
    seek_min: int = 40
    seek_max: int = 50

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'MatchSettings':
        """Build settings from a Flask config mapping, falling back to defaults."""
        defaults = cls()
        return cls(
            catalog_size=int(config.get('CATALOG_SIZE', defaults.catalog_size)),
            max_rounds=int(config.get('MAX_ROUNDS', defaults.max_rounds)),
            lobby_countdown=config.get('LOBBY_COUNTDOWN_SEC', defaults.lobby_countdown),
            guess_duration=config.get('GUESS_DURATION_SEC', defaults.guess_duration),
            reveal_duration=config.get('REVEAL_DURATION_SEC', defaults.reveal_duration),
            seek_min=int(config.get('SEEK_MIN_SEC', defaults.seek_min)),
            seek_max=int(config.get('SEEK_MAX_SEC', defaults.seek_max)),
        )
