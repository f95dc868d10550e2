import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # '*' stays a string: Socket.IO only treats the bare string as a wildcard
    ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '*')
    if ALLOWED_ORIGINS != '*':
        ALLOWED_ORIGINS = ALLOWED_ORIGINS.split(',')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Number of items in the client-side catalog; the server only deals indices
    CATALOG_SIZE = int(os.environ.get('CATALOG_SIZE', '300'))
    MAX_ROUNDS = int(os.environ.get('MAX_ROUNDS', '15'))
    # Round timers (seconds)
    LOBBY_COUNTDOWN_SEC = int(os.environ.get('LOBBY_COUNTDOWN_SEC', '3'))
    GUESS_DURATION_SEC = int(os.environ.get('GUESS_DURATION_SEC', '20'))
    REVEAL_DURATION_SEC = int(os.environ.get('REVEAL_DURATION_SEC', '8'))
    # Where clients start playback in the item, inclusive range (seconds)
    SEEK_MIN_SEC = int(os.environ.get('SEEK_MIN_SEC', '40'))
    SEEK_MAX_SEC = int(os.environ.get('SEEK_MAX_SEC', '50'))
    # 'socketio' runs timers as background tasks, 'manual' waits for advance()
    SCHEDULER = os.environ.get('SCHEDULER', 'socketio')
    PORT = int(os.environ.get('PORT', '3000'))
