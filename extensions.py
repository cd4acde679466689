from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_mail import Mail
from flask_socketio import SocketIO

from services.notifications import NotificationDispatcher

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
mail = Mail()
socketio = SocketIO(cors_allowed_origins="*", async_mode='threading')
notifier = NotificationDispatcher()


@login_manager.request_loader
def load_user_from_request(request):
    from flask import current_app, g
    from errors import InvalidToken, Unauthenticated
    from models.user import User

    scheme, _, token = request.headers.get('Authorization', '').partition(' ')
    token = token.strip()
    if scheme.lower() != 'bearer' or not token:
        g.auth_error = Unauthenticated()
        return None
    try:
        user_id = current_app.extensions['tokens'].verify(token)
    except Unauthenticated as e:
        g.auth_error = e
        return None
    user = db.session.get(User, user_id)
    if user is None:
        g.auth_error = InvalidToken()
    return user


@login_manager.unauthorized_handler
def unauthorized():
    from flask import g
    from errors import Unauthenticated
    raise g.pop('auth_error', None) or Unauthenticated()
