import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from errors import DuplicateEmail, InvalidCredentials, Internal, NotFound, ValidationError
from extensions import db
from models.user import User, ROLES

logger = logging.getLogger(__name__)

_dummy_hashes = {}


class CredentialStore:
    """User records and credential checks.

    Secrets are stored as salted adaptive hashes only and the hash is left
    out of every projection (see ``User.to_dict``).
    """

    def __init__(self, hash_method=None):
        self.hash_method = hash_method or current_app.config["PASSWORD_HASH_METHOD"]

    def register(self, name, email, secret, role='customer'):
        role = role or 'customer'
        if role not in ROLES:
            raise ValidationError(details={'role': [f'Must be one of: {", ".join(ROLES)}']})

        email = normalize_email(email)
        if User.query.filter_by(email=email).first():
            raise DuplicateEmail()

        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(secret, method=self.hash_method),
            role=role,
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # lost a race against a concurrent registration of the same email
            db.session.rollback()
            raise DuplicateEmail()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to store user %s", email)
            raise Internal()

        logger.info("Registered user %s with role %s", user.id, user.role)
        return user

    def authenticate(self, email, secret):
        user = User.query.filter_by(email=normalize_email(email)).first()
        if user is None:
            # burn the same hashing cost so timing does not reveal the miss
            check_password_hash(self._get_dummy_hash(), secret or '')
            raise InvalidCredentials()
        if not check_password_hash(user.password_hash, secret or ''):
            raise InvalidCredentials()
        return user

    def find_by_id(self, user_id):
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFound('User not found')
        return user

    def update_role(self, user_id, role):
        if role not in ROLES:
            raise ValidationError(details={'role': [f'Must be one of: {", ".join(ROLES)}']})
        user = self.find_by_id(user_id)
        old_role = user.role
        user.role = role
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to update role of user %s", user_id)
            raise Internal()
        logger.info("User %s role changed %s -> %s", user.id, old_role, role)
        return user

    def list_all(self):
        return User.query.order_by(User.id).all()

    def _get_dummy_hash(self):
        if self.hash_method not in _dummy_hashes:
            _dummy_hashes[self.hash_method] = generate_password_hash("not-a-real-password", method=self.hash_method)
        return _dummy_hashes[self.hash_method]


def normalize_email(email):
    return (email or '').strip().lower()
