"""
Flask-SocketIO push channel for real-time hiring workflow events
Delivery is best-effort: the notification log is the durable record
"""
from flask import current_app
from flask_socketio import SocketIO, join_room
from typing import Dict, Set
from threading import Lock


def user_room(user_id):
    return f"user_{user_id}"


class SocketIOConnectionManager:
    """
    Tracks which users hold live Socket.IO connections.
    Presence is per process; with a message queue other workers may hold
    connections this manager does not see.
    """

    def __init__(self):
        self.user_sessions: Dict[int, Set[str]] = {}  # Map user_id to set of session IDs
        self.session_users: Dict[str, int] = {}  # Map session ID back to user_id
        self.lock = Lock()

    def user_connected(self, user_id: int, session_id: str):
        """
        Mark a user as connected.

        Returns:
            True if the user was offline before this connection
        """
        with self.lock:
            was_offline = user_id not in self.user_sessions
            self.user_sessions.setdefault(user_id, set()).add(session_id)
            self.session_users[session_id] = user_id
        return was_offline

    def session_disconnected(self, session_id: str):
        """
        Handle a socket disconnecting.

        Returns:
            True if the owning user went offline (no more sessions), False otherwise
        """
        with self.lock:
            user_id = self.session_users.pop(session_id, None)
            if user_id is None or user_id not in self.user_sessions:
                return False

            self.user_sessions[user_id].discard(session_id)
            # If user has no more sessions, mark as offline
            if not self.user_sessions[user_id]:
                del self.user_sessions[user_id]
                return True
        return False

    def is_user_online(self, user_id: int) -> bool:
        with self.lock:
            return user_id in self.user_sessions

    def get_online_users(self) -> list:
        with self.lock:
            return list(self.user_sessions)


# Global SocketIO connection manager instance
socketio_manager = SocketIOConnectionManager()


class PushChannel:
    """
    Fire-and-forget event delivery addressed to a single user.
    Passed explicitly into services so they can be exercised without a live socket.
    """

    def __init__(self, socketio: SocketIO):
        self.socketio = socketio

    def publish(self, user_id, event, payload):
        """Emit `event` to the user's room; failures are logged, never raised"""
        try:
            self.socketio.emit(event, payload, to=user_room(user_id))
        except Exception as e:
            current_app.logger.warning(f"Push '{event}' to user {user_id} failed: {e}")
            return False
        return True


def get_push_channel():
    """Push channel bound to the current app"""
    return current_app.extensions['push_channel']


def _token_from_handshake(auth):
    from flask import request

    if isinstance(auth, dict) and auth.get('token'):
        return auth['token']
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() == 'bearer' and token.strip():
        return token.strip()
    return request.args.get('token')


def init_socketio_events(socketio: SocketIO):
    """
    Initialize Socket.IO event handlers.

    Args:
        socketio: Flask-SocketIO instance
    """
    from flask import request
    from jobboard.services.auth_service import user_from_token

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Authenticate with the bearer token and join the user's personal room"""
        token = _token_from_handshake(auth)
        user = user_from_token(token) if token else None
        if user is None:
            return False  # Reject unauthenticated connections

        socketio_manager.user_connected(user.id, request.sid)
        join_room(user_room(user.id))
        current_app.logger.debug(f"Socket {request.sid} connected for user {user.id}")

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        socketio_manager.session_disconnected(request.sid)
