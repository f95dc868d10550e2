"""Timer backends for match phases.

A scheduler runs ``callback(*args)`` once after ``delay`` seconds and hands
back a :class:`Timer` that can be cancelled. Matches never wait on a timer;
they schedule the next phase and return.
"""
import heapq
import itertools
import logging

logger = logging.getLogger(__name__)


class Timer:
    def __init__(self, delay: float):
        self.delay = delay
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class SocketIOScheduler:
    """Runs each timer as a Socket.IO background task.

    Works with whatever async mode the server picked (threading, eventlet,
    gevent) since sleeping goes through ``socketio.sleep``.
    """

    def __init__(self, socketio):
        self._socketio = socketio

    def schedule(self, delay: float, callback, *args) -> Timer:
        timer = Timer(delay)
        self._socketio.start_background_task(self._worker, timer, callback, args)
        return timer

    def _worker(self, timer: Timer, callback, args) -> None:
        self._socketio.sleep(timer.delay)
        if timer.cancelled:
            return
        timer.fired = True
        try:
            callback(*args)
        except Exception:
            logger.exception(f"[timer-error] callback={getattr(callback, '__name__', callback)} args={args}")


class ManualScheduler:
    """Virtual clock: timers only fire when :meth:`advance` moves time forward.

    Used when ``SCHEDULER = 'manual'`` so tests can step a match through its
    phases without real delays.
    """

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._seq = itertools.count()

    def schedule(self, delay: float, callback, *args) -> Timer:
        timer = Timer(delay)
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), timer, callback, args))
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._queue if entry[2].active)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in deadline order.

        Timers scheduled by a callback are fired too if they fall inside the
        window. Returns how many callbacks ran.
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, timer, callback, args = heapq.heappop(self._queue)
            self.now = deadline
            if timer.cancelled:
                continue
            timer.fired = True
            callback(*args)
            fired += 1
        self.now = target
        return fired
