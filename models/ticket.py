from extensions import db

from datetime import datetime, timezone

STATUSES = ('open', 'in_progress', 'closed')
PRIORITIES = ('low', 'medium', 'high')


def utcnow():
    return datetime.now(timezone.utc)


def as_utc(value):
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Ticket(db.Model):
    __tablename__ = "ticket"
    __table_args__ = (
        db.Index('idx_ticket_assigned_to', 'assigned_to'),
    )
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default='open')
    priority = db.Column(db.String(20), nullable=False, default='medium')

    # Plain ids, not foreign keys: users are resolved explicitly at read time
    created_by = db.Column(db.Integer, nullable=False)
    assigned_to = db.Column(db.Integer, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'status': self.status,
            'priority': self.priority,
            'created_by': self.created_by,
            'assigned_to': self.assigned_to,
            'created_at': as_utc(self.created_at).isoformat(),
            'updated_at': as_utc(self.updated_at).isoformat(),
        }

    def __repr__(self):
        return f'<Ticket {self.id} [{self.status}] {self.title!r}>'
