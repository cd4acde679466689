"""Role based access rules.

A single static table answers "may this role perform this action". Ticket
ownership for customer reads is checked by the caller, which has the ticket
in hand.
"""

from enum import Enum
from functools import wraps

from flask_login import current_user, login_required

from errors import AccessDenied


class Action(str, Enum):
    CREATE_TICKET = "create_ticket"
    READ_TICKET = "read_ticket"
    LIST_TICKETS = "list_tickets"
    UPDATE_TICKET = "update_ticket"
    UPDATE_STATUS = "update_status"
    ASSIGN_TICKET = "assign_ticket"
    DELETE_TICKET = "delete_ticket"
    UPDATE_USER_ROLE = "update_user_role"
    LIST_USERS = "list_users"


PERMISSIONS = {
    Action.CREATE_TICKET: frozenset({"customer"}),
    Action.READ_TICKET: frozenset({"customer", "agent", "admin"}),
    Action.LIST_TICKETS: frozenset({"agent", "admin"}),
    Action.UPDATE_TICKET: frozenset({"agent", "admin"}),
    Action.UPDATE_STATUS: frozenset({"agent", "admin"}),
    Action.ASSIGN_TICKET: frozenset({"admin"}),
    Action.DELETE_TICKET: frozenset({"admin"}),
    Action.UPDATE_USER_ROLE: frozenset({"admin"}),
    Action.LIST_USERS: frozenset({"admin"}),
}


def permit(role, action):
    try:
        action = Action(action)
    except ValueError:
        return False
    return role in PERMISSIONS[action]


def authorize(role, action):
    if not permit(role, action):
        raise AccessDenied()


def requires(action):
    """Route decorator: authenticate first, then check the role table."""
    def decorator(view):
        @wraps(view)
        @login_required
        def wrapped(*args, **kwargs):
            authorize(current_user.role, action)
            return view(*args, **kwargs)
        return wrapped
    return decorator


def authorize_ticket_read(user, ticket):
    """Customers may only read tickets they opened."""
    authorize(user.role, Action.READ_TICKET)
    if user.role == "customer" and ticket.created_by != user.id:
        raise AccessDenied()
