"""Flask web interface for Dono."""

import logging
from flask import Flask, request, jsonify
from flask_cors import CORS
from flask_socketio import SocketIO, emit

from .errors import DonoError, NotFoundError
from .history import History
from .items import Item, ItemKind

logger = logging.getLogger(__name__)

socketio = SocketIO(cors_allowed_origins="*")

def _record_or_none(log):
    try:
        return log.current().to_dict()
    except NotFoundError:
        return None

def create_app(history: History) -> Flask:
    """Build the Flask app serving the given history."""
    app = Flask(__name__)
    CORS(app)
    socketio.init_app(app)

    def get_log(kind):
        try:
            return history.log(ItemKind(kind))
        except ValueError:
            raise NotFoundError(f"unknown kind: {kind}") from None

    @app.errorhandler(DonoError)
    def handle_dono_error(e):
        logger.warning(f"{request.method} {request.path} failed: {e}")
        return jsonify(e.to_dict()), e.status_code

    @app.route('/api/status')
    def get_status():
        """Get current status."""
        return jsonify({
            'ok': True,
            'current': {kind.value: _record_or_none(log) for kind, log in history.logs.items()},
        })

    @app.route('/api/items', methods=['POST'])
    def add_item():
        """Log a played item."""
        data = request.get_json(silent=True)
        try:
            item = Item.from_json(data)
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        record = history.add(item).to_dict()
        socketio.emit('now_playing', record)
        return jsonify(record), 201

    @app.route('/api/<kind>/current')
    def get_current(kind):
        """Get the item playing now."""
        return jsonify(get_log(kind).current().to_dict())

    @app.route('/api/<kind>/previous')
    def get_previous(kind):
        """Get the item played before the current one."""
        return jsonify(get_log(kind).previous().to_dict())

    @app.route('/api/<kind>/all')
    def get_all(kind):
        """Get every logged play of a kind, newest first."""
        return jsonify([r.to_dict() for r in get_log(kind).all()])

    @app.route('/api/history')
    def get_history():
        """Get the merged play history, newest first."""
        raw_limit = request.args.get('limit')
        limit = None
        if raw_limit is not None:
            try:
                limit = int(raw_limit)
            except ValueError:
                limit = -1
            if limit < 0:
                return jsonify({'error': 'limit must be a non-negative integer'}), 400
        return jsonify([r.to_dict() for r in history.merged(limit)])

    return app

# WebSocket events
@socketio.on('connect')
def handle_connect():
    """Handle client connection."""
    logger.info("Client connected")
    emit('connected', {'message': 'Connected to Dono'})
