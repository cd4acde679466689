import pytest

from errors import DuplicateEmail, InvalidCredentials, NotFound, ValidationError
from models.user import User


def test_register_stores_hash_not_plaintext(store):
    user = store.register('Alice', 'alice@example.com', 'secret123', 'customer')

    assert user.id is not None
    assert user.role == 'customer'
    assert user.password_hash != 'secret123'
    assert 'secret123' not in user.password_hash


def test_register_defaults_role_to_customer(store):
    user = store.register('Bob', 'bob@example.com', 'secret123', None)
    assert user.role == 'customer'


def test_register_rejects_unknown_role(store):
    with pytest.raises(ValidationError):
        store.register('Eve', 'eve@example.com', 'secret123', 'superuser')


def test_duplicate_email_rejected_and_first_user_untouched(store):
    first = store.register('Alice', 'alice@example.com', 'secret123', 'agent')

    with pytest.raises(DuplicateEmail):
        store.register('Other Alice', 'Alice@Example.com', 'different', 'admin')

    assert User.query.count() == 1
    kept = store.find_by_id(first.id)
    assert kept.name == 'Alice'
    assert kept.role == 'agent'
    assert store.authenticate('alice@example.com', 'secret123').id == first.id


def test_authenticate_success(store):
    user = store.register('Alice', 'alice@example.com', 'secret123', 'customer')
    assert store.authenticate(' ALICE@example.com ', 'secret123').id == user.id


def test_wrong_password_and_unknown_email_are_indistinguishable(store):
    store.register('Alice', 'alice@example.com', 'secret123', 'customer')

    with pytest.raises(InvalidCredentials) as wrong_secret:
        store.authenticate('alice@example.com', 'nope')
    with pytest.raises(InvalidCredentials) as no_user:
        store.authenticate('ghost@example.com', 'secret123')

    assert type(wrong_secret.value) is type(no_user.value)
    assert wrong_secret.value.to_dict() == no_user.value.to_dict()


def test_find_by_id_missing(store):
    with pytest.raises(NotFound):
        store.find_by_id(999)


def test_update_role(store):
    user = store.register('Alice', 'alice@example.com', 'secret123', 'customer')

    updated = store.update_role(user.id, 'agent')

    assert updated.role == 'agent'
    assert store.find_by_id(user.id).role == 'agent'


def test_update_role_validates(store):
    user = store.register('Alice', 'alice@example.com', 'secret123', 'customer')
    with pytest.raises(ValidationError):
        store.update_role(user.id, 'root')
    with pytest.raises(NotFound):
        store.update_role(12345, 'agent')


def test_list_all_projection_hides_hash(store):
    store.register('Alice', 'alice@example.com', 'secret123', 'customer')
    store.register('Bob', 'bob@example.com', 'secret123', 'admin')

    users = [u.to_dict() for u in store.list_all()]

    assert [u['email'] for u in users] == ['alice@example.com', 'bob@example.com']
    for u in users:
        assert set(u) == {'id', 'name', 'email', 'role'}
