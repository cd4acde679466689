"""Ticket lifecycle.

Status may move between any of ``open``, ``in_progress`` and ``closed`` in
either direction. Every write commits a single ticket row and only then
notifies the assignee, so a failed commit never produces a notification.
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from errors import Internal, NotFound, ValidationError
from extensions import db
from models.ticket import Ticket, STATUSES, PRIORITIES, as_utc, utcnow
from models.user import User

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('title', 'description', 'status', 'priority', 'assigned_to')


class TicketService:

    def __init__(self, dispatcher, clock=utcnow):
        self.dispatcher = dispatcher
        self.clock = clock

    # --- reads -----------------------------------------------------------

    def get(self, ticket_id):
        ticket = db.session.get(Ticket, ticket_id)
        if ticket is None:
            raise NotFound('Ticket not found')
        return ticket

    def get_by_id(self, ticket_id):
        return self.project(self.get(ticket_id))

    def list_all(self):
        tickets = Ticket.query.order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()
        user_ids = {t.created_by for t in tickets} | {t.assigned_to for t in tickets if t.assigned_to}
        users = {}
        if user_ids:
            users = {u.id: u for u in User.query.filter(User.id.in_(user_ids)).all()}
        return [self.project(t, users) for t in tickets]

    def project(self, ticket, users=None):
        """Ticket dict with ``created_by``/``assigned_to`` resolved to users."""
        data = ticket.to_dict()
        data['created_by'] = self._user_projection(ticket, 'created_by', users)
        data['assigned_to'] = self._user_projection(ticket, 'assigned_to', users)
        return data

    # --- writes ----------------------------------------------------------

    def create(self, title, description, created_by, priority=None):
        _require_text('title', title)
        _require_text('description', description)
        priority = priority or 'medium'
        _check_choice('priority', priority, PRIORITIES)

        now = self.clock()
        ticket = Ticket(
            title=title,
            description=description,
            status='open',
            priority=priority,
            created_by=created_by,
            assigned_to=None,
            created_at=now,
            updated_at=now,
        )
        db.session.add(ticket)
        self._commit("create ticket")
        logger.info("Ticket %s created by user %s", ticket.id, created_by)
        return ticket

    def update(self, ticket_id, patch):
        unknown = set(patch) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(details={field: ['Unknown field'] for field in sorted(unknown)})
        ticket = self.get(ticket_id)

        if 'title' in patch:
            _require_text('title', patch['title'])
        if 'description' in patch:
            _require_text('description', patch['description'])
        if 'status' in patch:
            _check_choice('status', patch['status'], STATUSES)
        if 'priority' in patch:
            _check_choice('priority', patch['priority'], PRIORITIES)
        if patch.get('assigned_to') is not None:
            self._load_user(patch['assigned_to'])

        for field, value in patch.items():
            setattr(ticket, field, value)
        self._touch(ticket)
        self._commit("update ticket")
        logger.info("Ticket %s updated: %s", ticket.id, ", ".join(sorted(patch)) or "no fields")

        self._notify_assignee(ticket, 'Ticket Updated', 'A ticket assigned to you has been updated.')
        return ticket

    def assign(self, ticket_id, user_id):
        ticket = self.get(ticket_id)
        assignee = self._load_user(user_id)

        ticket.assigned_to = assignee.id
        self._touch(ticket)
        self._commit("assign ticket")
        logger.info("Ticket %s assigned to user %s", ticket.id, assignee.id)

        self.dispatcher.notify(assignee.email, 'Ticket Assigned', 'You have a new ticket assigned to you.')
        self.dispatcher.broadcast('ticket_assigned', {'user_id': assignee.id, 'ticket_id': ticket.id})
        return ticket

    def set_status(self, ticket_id, status):
        _check_choice('status', status, STATUSES)
        ticket = self.get(ticket_id)

        old_status = ticket.status
        ticket.status = status
        self._touch(ticket)
        self._commit("update ticket status")
        logger.info("Ticket %s status %s -> %s", ticket.id, old_status, status)

        self._notify_assignee(
            ticket,
            'Ticket Status Updated',
            f'The status of your ticket has been updated to {status}.',
        )
        return ticket

    def delete(self, ticket_id):
        ticket = self.get(ticket_id)
        db.session.delete(ticket)
        self._commit("delete ticket")
        logger.info("Ticket %s deleted", ticket_id)

    # --- helpers ---------------------------------------------------------

    def _touch(self, ticket):
        now = self.clock()
        previous = as_utc(ticket.updated_at)
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        ticket.updated_at = now

    def _commit(self, what):
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to %s", what)
            raise Internal()

    def _load_user(self, user_id):
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFound('User not found')
        return user

    def _notify_assignee(self, ticket, subject, body):
        if ticket.assigned_to is None:
            return
        user = db.session.get(User, ticket.assigned_to)
        if user is None:
            logger.warning("Ticket %s is assigned to missing user %s; not notifying",
                           ticket.id, ticket.assigned_to)
            return
        self.dispatcher.notify(user.email, subject, body)

    def _user_projection(self, ticket, field, users=None):
        user_id = getattr(ticket, field)
        if user_id is None:
            return None
        user = users.get(user_id) if users is not None else db.session.get(User, user_id)
        if user is None:
            logger.warning("Ticket %s references missing user %s in %s", ticket.id, user_id, field)
            return None
        return user.to_dict()


def _require_text(field, value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(details={field: ['This field is required.']})


def _check_choice(field, value, choices):
    if value not in choices:
        raise ValidationError(details={field: [f'Must be one of: {", ".join(choices)}']})
