from functools import wraps
from flask import request, jsonify
from capstone.utils.security import verify_token
from capstone.utils.logger import get_logger

logger = get_logger(__name__)


def require_auth(f):
    """Decorator to require a bearer token issued by the identity service"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        # Get token from Authorization header
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            return jsonify({'message': 'Authorization header missing'}), 401

        # Check format
        parts = auth_header.split()
        if len(parts) != 2 or parts[0] != 'Bearer':
            return jsonify({'message': 'Invalid authorization header format'}), 401

        # Verify token
        payload = verify_token(parts[1])
        if not payload:
            return jsonify({'message': 'Invalid or expired token'}), 401

        # Add user info to kwargs
        return f(current_user=payload, *args, **kwargs)

    return decorated_function


def require_role(allowed_roles):
    """Decorator to require specific roles"""
    def decorator(f):
        @wraps(f)
        def decorated_function(current_user, *args, **kwargs):
            if current_user.get('role') not in allowed_roles:
                logger.warning(f"Denied {request.path} to role {current_user.get('role')}")
                return jsonify({'message': 'Insufficient permissions'}), 403
            return f(current_user, *args, **kwargs)
        return decorated_function
    return decorator


def require_admin(f):
    """Decorator to require admin role"""
    return require_role(['admin'])(f)


def require_faculty(f):
    """Decorator to require faculty role"""
    return require_role(['faculty', 'admin'])(f)
