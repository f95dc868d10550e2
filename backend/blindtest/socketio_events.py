from flask import current_app, request
from flask_socketio import emit
import logging

logger = logging.getLogger(__name__)


def _engine():
    return current_app.extensions['matchmaking']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _parse_points(data):
    """Accept a bare number or {'points': n}; None if it is not a whole number."""
    if isinstance(data, dict):
        data = data.get('points')
    if isinstance(data, bool) or not isinstance(data, (int, float)):
        return None
    if isinstance(data, float):
        if not data.is_integer():
            return None
        data = int(data)
    return data


def handle_connect():
    logger.info(f"[connect] sid={_get_sid()}")
    emit('connected', {'message': 'Connected'})


def handle_disconnect(*args):
    sid = _get_sid()
    logger.info(f"[disconnect] sid={sid}")
    _engine().disconnect(sid)


def handle_identify(data):
    if not isinstance(data, dict):
        emit('error', {'message': 'identify expects a profile object'})
        return
    _engine().identify(_get_sid(), data)


def handle_submit_score(data):
    points = _parse_points(data)
    if points is None:
        emit('error', {'message': 'points must be a whole number'})
        return
    _engine().submit_score(_get_sid(), points)


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    from blindtest import socketio

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('identify', handle_identify, namespace=namespace)
    socketio.on_event('submit_score', handle_submit_score, namespace=namespace)
