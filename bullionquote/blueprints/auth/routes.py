"""Staff auth routes."""
from flask import jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from bullionquote.blueprints.auth import auth_bp
from bullionquote.blueprints.errors import form_error
from bullionquote.forms import LoginForm
from bullionquote.models import StaffUser


@auth_bp.route('/login', methods=['POST'])
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        return form_error(form)
    user = StaffUser.authenticate(form.username.data, form.password.data)
    if user is None:
        current_app.logger.info('Staff login rejected')
        return jsonify({'error': 'unauthorized', 'message': 'Invalid username or password.'}), 401
    login_user(user, remember=form.remember_me.data)
    return jsonify({'username': user.username})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'You have been logged out.'})


@auth_bp.route('/me')
def me():
    if not current_user.is_authenticated:
        return jsonify({'staff': False})
    return jsonify({'staff': True, 'username': current_user.username})


@auth_bp.route('/csrf-token')
def csrf_token():
    return jsonify({'csrf_token': generate_csrf()})
