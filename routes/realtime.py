import logging

from flask import request

from extensions import socketio

logger = logging.getLogger(__name__)


@socketio.on('connect')
def handle_connect(auth=None):
    logger.info("WebSocket client connected: %s", request.sid)


@socketio.on('disconnect')
def handle_disconnect(*args):
    logger.info("WebSocket client disconnected: %s", request.sid)
