import logging
import random
import threading
from typing import Any, Dict, Optional

from blindtest.models import PlayerHandle
from .match import Match
from .pairing import MatchmakingQueue
from .registry import MatchRegistry
from .settings import MatchSettings

logger = logging.getLogger(__name__)


class MatchEngine:
    """Entry point for everything that can change a match.

    Socket handlers and timers both come through here, one at a time, under a
    single re-entrant lock. Timers hold a match id, never the match itself, so
    a timer firing after its match was destroyed simply misses the lookup.
    """

    def __init__(self, settings: MatchSettings, scheduler, broadcaster, rng=None):
        self.settings = settings
        self.scheduler = scheduler
        self.broadcaster = broadcaster
        self.queue = MatchmakingQueue()
        self.registry = MatchRegistry()
        self._rng = rng or random.Random()
        self._lock = threading.RLock()

    def identify(self, sid: str, profile: Dict[str, Any]) -> Optional[Match]:
        """Enroll a player; returns the new match if this arrival formed one."""
        with self._lock:
            if self.registry.match_for(sid) is not None:
                logger.info(f"[identify-ignored] sid={sid} already in a match")
                return None
            waiting = self.queue.waiting
            if waiting is not None and waiting.sid == sid:
                waiting.profile = dict(profile)
                self.broadcaster.to_player(sid, 'waiting_opponent')
                return None

            handle = PlayerHandle(sid=sid, profile=dict(profile))
            logger.info(f"[identify] sid={sid} name={handle.name}")
            pair = self.queue.arrive(handle)
            if pair is None:
                self.broadcaster.to_player(sid, 'waiting_opponent')
                return None

            p1, p2 = pair
            match = Match(
                p1, p2,
                settings=self.settings,
                scheduler=self.scheduler,
                broadcaster=self.broadcaster,
                on_timer=self.fire_timer,
                on_close=self._unregister,
                rng=self._rng,
            )
            self.registry.add(match)
            match.start()
            return match

    def submit_score(self, sid: str, points: int) -> bool:
        with self._lock:
            match = self.registry.match_for(sid)
            if match is None:
                logger.debug(f"[score-stale] sid={sid} has no active match")
                return False
            return match.submit_score(sid, points)

    def disconnect(self, sid: str) -> None:
        with self._lock:
            waiting = self.queue.waiting
            if waiting is not None and waiting.sid == sid:
                self.queue.remove(waiting)
                logger.info(f"[queue-leave] sid={sid}")
            match = self.registry.match_for(sid)
            if match is not None:
                match.abort(sid)

    def fire_timer(self, match_id: str, token: int) -> None:
        with self._lock:
            match = self.registry.get(match_id)
            if match is None:
                logger.debug(f"[timer-stale] match={match_id} token={token} no longer registered")
                return
            match.handle_timer(token)

    def match_for(self, sid: str) -> Optional[Match]:
        with self._lock:
            return self.registry.match_for(sid)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {'waiting': len(self.queue), 'active_matches': len(self.registry)}

    def _unregister(self, match: Match) -> None:
        self.registry.remove(match.id)
        self.broadcaster.close(match.id)
