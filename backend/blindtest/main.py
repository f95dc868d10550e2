from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Blind-test duel server is running.'})


@main.route('/health')
def health():
    engine = current_app.extensions['matchmaking']
    return jsonify({'status': 'ok', **engine.stats()})
