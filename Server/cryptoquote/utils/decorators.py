"""
Route Decorators

Contains decorators shared by the HTTP controllers.
"""

from functools import wraps
from flask import jsonify


def require_service(getter, name):
    """
    Decorator that resolves a global service before the endpoint runs.

    The service is passed to the endpoint as the `service` keyword argument.
    Responds with 500 when the service has not been initialized.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            service = getter()
            if not service:
                return jsonify({
                    'success': False,
                    'error': f'{name} service unavailable'
                }), 500

            kwargs['service'] = service
            return f(*args, **kwargs)

        return decorated_function

    return decorator
