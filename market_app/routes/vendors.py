"""
Vendor account routes: /api/vendors
"""
from flask import Blueprint, g, jsonify

from market_app.auth import get_services, request_data, request_upload, token_required

vendors_bp = Blueprint('vendors', __name__, url_prefix='/api/vendors')


@vendors_bp.route('/register', methods=['POST'])
def register():
    """Register a vendor account."""
    data = request_data()
    get_services().accounts.register(
        name=data.get('name'),
        shop_name=data.get('shopName'),
        location=data.get('location'),
        contact=data.get('contact'),
        email=data.get('email'),
        password=data.get('password'),
        password2=data.get('password2'),
    )
    return jsonify({'message': 'User registered successfully'}), 201


@vendors_bp.route('/login', methods=['POST'])
def login():
    data = request_data()
    result = get_services().accounts.login(data.get('email'), data.get('password'))
    return jsonify(result), 200


@vendors_bp.route('/<vendor_id>', methods=['GET'])
def get_vendor(vendor_id):
    return jsonify(get_services().accounts.get_by_id(vendor_id)), 200


@vendors_bp.route('', methods=['GET'])
def list_vendors():
    """List all vendors."""
    return jsonify(get_services().accounts.list_all()), 200


@vendors_bp.route('/change-avatar', methods=['POST'])
@token_required
def change_avatar():
    """Replace the current vendor's avatar (multipart field 'avatar')."""
    user = get_services().accounts.change_avatar(g.user['id'], request_upload('avatar'))
    return jsonify(user), 200


@vendors_bp.route('/edit-user', methods=['PATCH'])
@token_required
def edit_user():
    data = request_data()
    user = get_services().accounts.edit_profile(
        g.user['id'],
        name=data.get('name'),
        email=data.get('email'),
        shop_name=data.get('shopName'),
        location=data.get('location'),
        contact=data.get('contact'),
        current_password=data.get('currentPassword'),
        new_password=data.get('newPassword'),
        new_confirm_password=data.get('newConfirmPassword'),
    )
    return jsonify(user), 200
