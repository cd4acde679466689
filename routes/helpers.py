from flask import current_app, request

from errors import ValidationError
from services.credentials import CredentialStore
from services.tickets import TicketService


def load_form(form_cls):
    """Bind ``form_cls`` to the request body and validate it."""
    if request.is_json:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError('Request body must be a JSON object')
        # the body is wrapped in a MultiDict, which would split lists into
        # several values and drop empty ones
        nested = sorted(key for key, value in body.items() if isinstance(value, (list, dict)))
        if nested:
            raise ValidationError(details={key: ['Expected a single value.'] for key in nested})
    form = form_cls()
    if not form.validate_on_submit():
        raise ValidationError(details=form.errors)
    return form


def token_service():
    return current_app.extensions['tokens']


def credential_store():
    return CredentialStore()


def ticket_service():
    return TicketService(current_app.extensions['notifications'])
