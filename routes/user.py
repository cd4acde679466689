from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from forms.user_forms import RoleForm
from routes.helpers import credential_store, load_form
from services.policy import Action, requires

user_bp = Blueprint('user', __name__, url_prefix='/api/users')


@user_bp.route('/profile', methods=['GET'])
@login_required
def profile():
    return jsonify(current_user.to_dict())


@user_bp.route('/role', methods=['PUT'])
@requires(Action.UPDATE_USER_ROLE)
def update_role():
    form = load_form(RoleForm)
    user = credential_store().update_role(form.id.data, form.role.data)
    return jsonify(user.to_dict())


@user_bp.route('', methods=['GET'])
@requires(Action.LIST_USERS)
def list_users():
    return jsonify([u.to_dict() for u in credential_store().list_all()])
