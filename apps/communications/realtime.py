# communications/realtime.py
"""
Socket.IO channel for chat delivery, typing indicators and presence.

Clients announce themselves with `user_online`; the registry below maps
user ids to their current socket id so events can be addressed to a user.
"""
import logging
import threading

import socketio
from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.users.services import set_online_status

from . import services
from .serializers import MessageSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


def _cors_origins():
    origins = settings.SOCKETIO_CORS_ORIGINS
    if origins == '*':
        return origins
    return [o.strip() for o in origins.split(',') if o.strip()]


sio = socketio.Server(async_mode='threading', cors_allowed_origins=_cors_origins())


class ConnectionRegistry:
    """Thread-safe map between user ids and socket ids."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sid_by_user = {}
        self._user_by_sid = {}

    def register(self, user_id, sid):
        with self._lock:
            previous = self._user_by_sid.pop(sid, None)
            if previous is not None and self._sid_by_user.get(previous) == sid:
                del self._sid_by_user[previous]
            old_sid = self._sid_by_user.get(user_id)
            if old_sid is not None and old_sid != sid:
                self._user_by_sid.pop(old_sid, None)
            self._sid_by_user[user_id] = sid
            self._user_by_sid[sid] = user_id

    def unregister(self, sid):
        with self._lock:
            user_id = self._user_by_sid.pop(sid, None)
            if user_id is not None and self._sid_by_user.get(user_id) == sid:
                del self._sid_by_user[user_id]
            return user_id

    def sid_for(self, user_id):
        with self._lock:
            return self._sid_by_user.get(str(user_id))

    def user_for(self, sid):
        with self._lock:
            return self._user_by_sid.get(sid)

    def is_online(self, user_id):
        return self.sid_for(user_id) is not None

    def clear(self):
        with self._lock:
            self._sid_by_user.clear()
            self._user_by_sid.clear()


registry = ConnectionRegistry()


def emit_to_user(event, data, user_id):
    """Emit to a user's socket when connected. Returns True when delivered."""
    sid = registry.sid_for(user_id)
    if sid is None:
        return False
    sio.emit(event, data, to=sid)
    return True


def notify_new_message(message):
    return emit_to_user('message_received', MessageSerializer(message).data, message.to_user_id)


def broadcast_support_reply(support_message):
    sio.emit('supportReply', {
        'id': str(support_message.id),
        'subject': support_message.subject,
        'adminReply': support_message.admin_reply,
        'repliedAt': support_message.replied_at.isoformat() if support_message.replied_at else None,
        'userId': str(support_message.user_id),
    })


@sio.event
def connect(sid, environ, auth=None):
    logger.debug("Socket connected: %s", sid)


@sio.on('user_online')
def user_online(sid, user_id):
    user_id = str(user_id)
    registry.register(user_id, sid)
    set_online_status(user_id, True)
    sio.emit('user_status_change', {'userId': user_id, 'isOnline': True}, skip_sid=sid)


@sio.on('send_message')
def send_message(sid, data):
    from_user_id = str(data.get('fromUserId') or '')
    sender = registry.user_for(sid)
    if sender is None or sender != from_user_id:
        sio.emit('message_error', {'error': 'Not authorized to send as this user'}, to=sid)
        return
    try:
        from_user = User.objects.get(pk=from_user_id)
        message = services.create_message(
            from_user,
            data.get('toUserId'),
            data.get('content'),
            attachment=data.get('attachment'),
            attachment_type=data.get('attachmentType'),
        )
        payload = MessageSerializer(message).data
    except Exception as exc:
        logger.error("Message send error: %s", exc)
        sio.emit('message_error', {'error': str(exc) or 'Unknown error'}, to=sid)
        return

    emit_to_user('message_received', payload, message.to_user_id)
    sio.emit('message_sent', payload, to=sid)


def _relay_typing(data, event):
    emit_to_user(event, {'userId': data.get('fromUserId')}, data.get('toUserId'))


@sio.on('typing_start')
def typing_start(sid, data):
    _relay_typing(data, 'user_typing')


@sio.on('typing_stop')
def typing_stop(sid, data):
    _relay_typing(data, 'user_stopped_typing')


@sio.event
def disconnect(sid, reason=None):
    user_id = registry.unregister(sid)
    logger.debug("Socket disconnected: %s (%s)", sid, user_id)
    if user_id is None:
        return
    set_online_status(user_id, False)
    sio.emit('user_status_change', {
        'userId': user_id,
        'isOnline': False,
        'lastSeen': timezone.now().isoformat(),
    }, skip_sid=sid)
