import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from errors import Internal, TicketDeskError
from extensions import db

logger = logging.getLogger(__name__)


def register_error_handlers(app):

    @app.errorhandler(TicketDeskError)
    def handle_ticketdesk_error(e):
        if e.status_code >= 500:
            logger.error("%s: %s", type(e).__name__, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        code = e.name.lower().replace(' ', '_')
        return jsonify(error=code, message=e.description), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        logger.exception("Unhandled error")
        err = Internal()
        return jsonify(err.to_dict()), err.status_code
