import os

import socketio
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

django_app = get_wsgi_application()

# Socket.IO traffic under /socket.io/ is handled by the realtime server,
# everything else falls through to Django.
from apps.communications.realtime import sio  # noqa: E402

application = socketio.WSGIApp(sio, django_app, socketio_path='socket.io')
