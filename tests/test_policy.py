import pytest

from errors import AccessDenied
from services.policy import Action, authorize, permit

EXPECTED = {
    Action.CREATE_TICKET: {'customer': True, 'agent': False, 'admin': False},
    Action.READ_TICKET: {'customer': True, 'agent': True, 'admin': True},
    Action.LIST_TICKETS: {'customer': False, 'agent': True, 'admin': True},
    Action.UPDATE_TICKET: {'customer': False, 'agent': True, 'admin': True},
    Action.UPDATE_STATUS: {'customer': False, 'agent': True, 'admin': True},
    Action.ASSIGN_TICKET: {'customer': False, 'agent': False, 'admin': True},
    Action.DELETE_TICKET: {'customer': False, 'agent': False, 'admin': True},
    Action.UPDATE_USER_ROLE: {'customer': False, 'agent': False, 'admin': True},
    Action.LIST_USERS: {'customer': False, 'agent': False, 'admin': True},
}


@pytest.mark.parametrize('action,role,allowed', [
    (action, role, allowed)
    for action, row in EXPECTED.items()
    for role, allowed in row.items()
])
def test_permission_table(action, role, allowed):
    assert permit(role, action) is allowed


def test_table_covers_every_action():
    assert set(EXPECTED) == set(Action)


def test_actions_accepted_by_value():
    assert permit('admin', 'assign_ticket') is True
    assert permit('customer', 'assign_ticket') is False


@pytest.mark.parametrize('role', [None, '', 'root', 'ADMIN'])
def test_unknown_roles_are_denied(role):
    assert not any(permit(role, action) for action in Action)


def test_unknown_action_is_denied():
    assert permit('admin', 'launch_rockets') is False


def test_authorize_raises_access_denied():
    authorize('admin', Action.DELETE_TICKET)
    with pytest.raises(AccessDenied):
        authorize('agent', Action.DELETE_TICKET)
