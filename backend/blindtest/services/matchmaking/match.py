"""One two-player blind-test match.

A match walks lobby -> (guessing -> reveal) x max_rounds -> ended on its own,
one timer at a time. Every timer carries the match id and a token; when it
fires, the engine looks the match up again and the match ignores any token
that is not its current one, so a timer that outlived its match does nothing.
"""
import logging
import random
from typing import Callable, Dict, Optional, Tuple

from blindtest.models import ENDED, GUESSING, LOBBY, REVEAL, PlayerHandle
from .deck import generate_deck, pick_seek_offset
from .settings import MatchSettings

logger = logging.getLogger(__name__)


def match_id_for(p1: PlayerHandle, p2: PlayerHandle) -> str:
    # Socket.IO sids are base64url, so they may hold '_' but never ':'
    sep = ':' if '_' in p1.sid or '_' in p2.sid else '_'
    return f"room_{p1.sid}{sep}{p2.sid}"


class Match:
    def __init__(
        self,
        p1: PlayerHandle,
        p2: PlayerHandle,
        settings: MatchSettings,
        scheduler,
        broadcaster,
        on_timer: Callable[[str, int], None],
        on_close: Callable[['Match'], None],
        rng=random,
    ):
        self.id = match_id_for(p1, p2)
        self.p1 = p1
        self.p2 = p2
        self.settings = settings
        self.round = 0
        self.max_rounds = settings.max_rounds
        self.deck = generate_deck(settings.max_rounds, settings.catalog_size, rng)
        self.phase = LOBBY
        self.item_index: Optional[int] = None
        self.seek_offset: Optional[int] = None
        self._scheduler = scheduler
        self._broadcaster = broadcaster
        self._on_timer = on_timer
        self._on_close = on_close
        self._rng = rng
        self._timer = None
        self._token = 0

    def __repr__(self):
        return f"<Match {self.id} phase={self.phase} round={self.round}/{self.max_rounds}>"

    @property
    def players(self) -> Tuple[PlayerHandle, PlayerHandle]:
        return self.p1, self.p2

    @property
    def ended(self) -> bool:
        return self.phase == ENDED

    @property
    def has_timer(self) -> bool:
        return self._timer is not None and self._timer.active

    def participant(self, sid: str) -> Optional[PlayerHandle]:
        for player in self.players:
            if player.sid == sid:
                return player
        return None

    def opponent_of(self, sid: str) -> Optional[PlayerHandle]:
        if sid == self.p1.sid:
            return self.p2
        if sid == self.p2.sid:
            return self.p1
        return None

    def scoreboard(self) -> Dict[str, int]:
        return {'p1': self.p1.score, 'p2': self.p2.score}

    # ---- lifecycle ----

    def start(self) -> None:
        """Announce the match to both players and start the lobby countdown."""
        for player in self.players:
            self._broadcaster.join(player.sid, self.id)
        self._broadcaster.to_match(self.id, 'match_found', {
            'p1': self.p1.to_dict(),
            'p2': self.p2.to_dict(),
            'roomId': self.id,
        })
        logger.info(f"[match-start] match={self.id} p1={self.p1.name} p2={self.p2.name} deck={self.deck}")
        self._schedule(self.settings.lobby_countdown)

    def handle_timer(self, token: int) -> bool:
        """Advance to the next phase. Returns False for a stale token."""
        if self.ended or token != self._token:
            logger.debug(f"[timer-stale] match={self.id} token={token} current={self._token} phase={self.phase}")
            return False
        self._timer = None
        if self.phase == LOBBY:
            self._begin_round()
        elif self.phase == GUESSING:
            self._reveal()
        elif self.phase == REVEAL:
            if self.round >= self.max_rounds:
                self._finish()
            else:
                self._begin_round()
        return True

    def _begin_round(self) -> None:
        self.round += 1
        self.phase = GUESSING
        self.item_index = self.deck[self.round - 1]
        self.seek_offset = pick_seek_offset(self.settings.seek_min, self.settings.seek_max, self._rng)
        self._broadcaster.to_match(self.id, 'round_start', {
            'round': self.round,
            'songIndex': self.item_index,
            'seekTime': self.seek_offset,
            'duration': self.settings.guess_duration,
        })
        logger.info(f"[round-start] match={self.id} round={self.round}/{self.max_rounds} item={self.item_index} seek={self.seek_offset}")
        self._schedule(self.settings.guess_duration)

    def _reveal(self) -> None:
        self.phase = REVEAL
        self._broadcaster.to_match(self.id, 'round_reveal')
        self._schedule(self.settings.reveal_duration)

    def _finish(self) -> None:
        self._close()
        self._broadcaster.to_match(self.id, 'game_over', {
            'p1Score': self.p1.score,
            'p2Score': self.p2.score,
        })
        logger.info(f"[game-over] match={self.id} score={self.p1.score}-{self.p2.score}")
        self._on_close(self)

    def abort(self, departed_sid: str) -> None:
        """End the match at once because `departed_sid` went away."""
        if self.ended:
            return
        remaining = self.opponent_of(departed_sid)
        self._close()
        if remaining is not None:
            self._broadcaster.to_player(remaining.sid, 'opponent_left')
        logger.info(f"[opponent-left] match={self.id} departed={departed_sid} round={self.round}")
        self._on_close(self)

    # ---- scoring ----

    def submit_score(self, sid: str, points: int) -> bool:
        if self.ended:
            return False
        player = self.participant(sid)
        if player is None:
            logger.warning(f"[score-ignored] match={self.id} sid={sid} is not a participant")
            return False
        player.score += points
        self._broadcaster.to_match(self.id, 'score_update', self.scoreboard())
        return True

    # ---- timers ----

    def _schedule(self, delay: float) -> None:
        self._cancel_timer()
        self._token += 1
        self._timer = self._scheduler.schedule(delay, self._on_timer, self.id, self._token)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _close(self) -> None:
        self.phase = ENDED
        self._cancel_timer()
        # Any timer still in flight now misses on token as well as on lookup
        self._token += 1
