"""Best-effort notifications.

``NotificationDispatcher`` is a Flask extension. ``notify`` hands the work to a
thread pool and returns immediately; the worker tries mail delivery and then
broadcasts the same payload to real-time listeners whether or not the mail
went out. Nothing raised by either transport reaches the caller.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait

from flask_mail import Message

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


class MailTransport:
    def __init__(self, mail, sender=None):
        self.mail = mail
        self.sender = sender

    def send(self, recipient, subject, body):
        msg = Message(subject=subject, recipients=[recipient], body=body, sender=self.sender)
        self.mail.send(msg)


class SocketBroadcaster:
    def __init__(self, socketio):
        self.socketio = socketio

    def emit(self, event, payload):
        self.socketio.emit(event, payload)


class NotificationDispatcher:

    def __init__(self, app=None, mailer=None, broadcaster=None):
        self.mailer = mailer
        self.broadcaster = broadcaster
        self.app = None
        self._executor = None
        self._pending = set()
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app, mailer=None, broadcaster=None):
        self.app = app
        if mailer is not None:
            self.mailer = mailer
        if broadcaster is not None:
            self.broadcaster = broadcaster
        if self._executor is not None:
            self._executor.shutdown(wait=False)
        self._executor = ThreadPoolExecutor(
            max_workers=app.config.get('NOTIFY_MAX_WORKERS', 4),
            thread_name_prefix='notify',
        )
        app.extensions['notifications'] = self

    def notify(self, recipient_email, subject, body):
        payload = {
            'recipient': recipient_email,
            'subject': subject,
            'message': body,
        }
        self._submit(self._deliver, recipient_email, subject, body, payload)

    def broadcast(self, event, payload):
        self._submit(self._emit, event, payload)

    def flush(self, timeout=None):
        """Block until every task submitted so far has finished."""
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def shutdown(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _submit(self, fn, *args):
        if self._executor is None:
            logger.error("Notification dispatcher used before init_app; dropping %s", fn.__name__)
            return
        try:
            future = self._executor.submit(self._run, fn, *args)
        except RuntimeError:
            logger.exception("Notification executor rejected task")
            return
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future):
        with self._lock:
            self._pending.discard(future)

    def _run(self, fn, *args):
        with self.app.app_context():
            fn(*args)

    def _deliver(self, recipient, subject, body, payload):
        try:
            self.mailer.send(recipient, subject, body)
            logger.info("Email sent to %s: %s", recipient, subject)
        except Exception:
            logger.exception("Email error sending %r to %s", subject, recipient)
        self._emit(NOTIFICATION_EVENT, payload)

    def _emit(self, event, payload):
        try:
            self.broadcaster.emit(event, payload)
        except Exception:
            logger.exception("Broadcast of %s failed", event)
