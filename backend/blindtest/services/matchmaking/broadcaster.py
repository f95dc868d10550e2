class SocketIOBroadcaster:
    """Sends match events through Flask-SocketIO.

    Each match gets a Socket.IO room named after its id; single-player
    events go straight to the player's sid.
    """

    def __init__(self, socketio, namespace: str = '/ws'):
        self._socketio = socketio
        self.namespace = namespace

    def to_player(self, sid: str, event: str, data=None) -> None:
        self._emit(event, data, to=sid)

    def to_match(self, match_id: str, event: str, data=None) -> None:
        self._emit(event, data, to=match_id)

    def join(self, sid: str, match_id: str) -> None:
        self._socketio.server.enter_room(sid, match_id, namespace=self.namespace)

    def close(self, match_id: str) -> None:
        self._socketio.close_room(match_id, namespace=self.namespace)

    def _emit(self, event, data, to):
        if data is None:
            self._socketio.emit(event, to=to, namespace=self.namespace)
        else:
            self._socketio.emit(event, data, to=to, namespace=self.namespace)
