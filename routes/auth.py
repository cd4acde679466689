import logging

from flask import Blueprint, jsonify

from forms.auth_forms import LoginForm, RegisterForm
from routes.helpers import credential_store, load_form, token_service

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    form = load_form(RegisterForm)
    user = credential_store().register(
        name=form.name.data.strip(),
        email=form.email.data,
        secret=form.password.data,
        role=form.role.data or 'customer',
    )
    token = token_service().issue(user.id)
    return jsonify(message='User registered successfully', token=token), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    form = load_form(LoginForm)
    user = credential_store().authenticate(form.email.data, form.password.data)
    logger.info("User %s logged in", user.id)
    return jsonify(token=token_service().issue(user.id))
