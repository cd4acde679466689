from flask import Blueprint, jsonify
from flask_login import current_user

from errors import AccessDenied, NotFound
from forms.ticket_forms import AssignForm, EditTicketForm, StatusForm, TicketForm
from routes.helpers import load_form, ticket_service
from services.policy import Action, authorize_ticket_read, requires

ticket_bp = Blueprint('ticket', __name__, url_prefix='/api/tickets')


@ticket_bp.route('', methods=['POST'])
@requires(Action.CREATE_TICKET)
def create_ticket():
    form = load_form(TicketForm)
    tickets = ticket_service()
    ticket = tickets.create(
        title=form.title.data,
        description=form.description.data,
        created_by=current_user.id,
        priority=form.priority.data or None,
    )
    return jsonify(tickets.project(ticket)), 201


@ticket_bp.route('', methods=['GET'])
@requires(Action.LIST_TICKETS)
def list_tickets():
    return jsonify(ticket_service().list_all())


@ticket_bp.route('/<int:ticket_id>', methods=['GET'])
@requires(Action.READ_TICKET)
def get_ticket(ticket_id):
    tickets = ticket_service()
    try:
        ticket = tickets.get(ticket_id)
    except NotFound:
        # customers see the same error for missing and foreign tickets
        if current_user.role == 'customer':
            raise AccessDenied()
        raise
    authorize_ticket_read(current_user, ticket)
    return jsonify(tickets.project(ticket))


@ticket_bp.route('/<int:ticket_id>', methods=['PUT'])
@requires(Action.UPDATE_TICKET)
def update_ticket(ticket_id):
    form = load_form(EditTicketForm)
    tickets = ticket_service()
    ticket = tickets.update(ticket_id, form.patch())
    return jsonify(tickets.project(ticket))


@ticket_bp.route('/<int:ticket_id>', methods=['DELETE'])
@requires(Action.DELETE_TICKET)
def delete_ticket(ticket_id):
    ticket_service().delete(ticket_id)
    return jsonify(message='Ticket deleted')


@ticket_bp.route('/<int:ticket_id>/assign', methods=['PUT'])
@requires(Action.ASSIGN_TICKET)
def assign_ticket(ticket_id):
    form = load_form(AssignForm)
    tickets = ticket_service()
    ticket = tickets.assign(ticket_id, form.user_id.data)
    return jsonify(tickets.project(ticket))


@ticket_bp.route('/<int:ticket_id>/status', methods=['PUT'])
@requires(Action.UPDATE_STATUS)
def change_status(ticket_id):
    form = load_form(StatusForm)
    tickets = ticket_service()
    ticket = tickets.set_status(ticket_id, form.status.data)
    return jsonify(tickets.project(ticket))
