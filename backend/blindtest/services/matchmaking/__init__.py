"""Matchmaking and round timing for two-player blind-test matches.

Transport-free: the engine talks to clients through a broadcaster and to
time through a scheduler, both injected, so the same code runs behind
Flask-SocketIO and under tests with a manual clock.
"""
from .broadcaster import SocketIOBroadcaster
from .deck import generate_deck, pick_seek_offset
from .engine import MatchEngine
from .match import Match, match_id_for
from .pairing import MatchmakingQueue
from .registry import MatchRegistry
from .scheduler import ManualScheduler, SocketIOScheduler, Timer
from .settings import MatchSettings

__all__ = [
    'ManualScheduler',
    'Match',
    'MatchEngine',
    'MatchRegistry',
    'MatchSettings',
    'MatchmakingQueue',
    'SocketIOBroadcaster',
    'SocketIOScheduler',
    'Timer',
    'generate_deck',
    'match_id_for',
    'pick_seek_offset',
]
