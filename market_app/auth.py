"""
Request helpers shared by the route blueprints: service lookup, bearer auth, body parsing.
"""
from functools import wraps

from flask import current_app, g, request

from market_app.models import Upload
from market_app.services import MarketServices


def get_services() -> MarketServices:
    return current_app.extensions['market']


def token_required(f):
    """Decorator to require a valid bearer token; the caller lands in g.user."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        credentials = get_services().credentials
        token = credentials.token_from_header(request.headers.get('Authorization'))
        g.user = credentials.authenticate(token)
        return f(*args, **kwargs)
    return decorated_function


def request_data() -> dict:
    """JSON body, or form fields for multipart/urlencoded requests."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def request_upload(field: str):
    return Upload.from_file_storage(request.files.get(field))
