import atexit
import logging

import click
from flask import Flask
from config import Config
from extensions import db, login_manager, migrate, mail, socketio, notifier
from routes.auth import auth_bp
from routes.ticket import ticket_bp
from routes.user import user_bp
from routes.errors import register_error_handlers
from services.notifications import MailTransport, SocketBroadcaster
from services.tokens import TokenService
import routes.realtime  # noqa: F401  (registers Socket.IO handlers)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    if not app.config.get("JWT_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET is not set in the environment")

    if not app.debug and not app.testing:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Extensions
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)
    socketio.init_app(app)
    notifier.init_app(
        app,
        mailer=MailTransport(mail, sender=app.config.get("MAIL_DEFAULT_SENDER")),
        broadcaster=SocketBroadcaster(socketio),
    )
    app.extensions['tokens'] = TokenService.from_config(app.config)

    # Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(ticket_bp)
    app.register_blueprint(user_bp)
    register_error_handlers(app)

    @app.cli.command("init-db")
    def init_db():
        """Create tables without going through migrations."""
        db.create_all()
        click.echo("Database initialised")

    return app


if __name__ == "__main__":
    app = create_app()
    atexit.register(notifier.shutdown)
    socketio.run(app, host="0.0.0.0", port=5000, debug=True)
