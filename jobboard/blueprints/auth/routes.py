from flask import request, jsonify
from flask_login import login_required, current_user
from jobboard import limiter
from jobboard.blueprints.auth import auth_bp
from jobboard.services import auth_service


def _token_response(user, message, status=200):
    return jsonify({
        'token': auth_service.create_access_token(user),
        'user': user.to_dict(),
        'message': message,
    }), status


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per hour")
def register():
    """Register a job seeker or employer and return a bearer token"""
    data = request.get_json(silent=True) or {}
    user = auth_service.register_user(data)
    return _token_response(user, 'User registered successfully!', 201)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("5 per minute")
def login():
    data = request.get_json(silent=True) or {}
    user = auth_service.authenticate(data.get('email'), data.get('password'))
    return _token_response(user, 'User logged in successfully!')


@auth_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    return jsonify(current_user.to_dict())


@auth_bp.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    updates = request.get_json(silent=True) or {}
    user = auth_service.update_profile(current_user, updates)
    return jsonify(user.to_dict())
