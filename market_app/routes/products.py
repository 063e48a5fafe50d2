"""
Product listing routes: /api/products
"""
from flask import Blueprint, g, jsonify

from market_app.auth import get_services, request_data, request_upload, token_required

products_bp = Blueprint('products', __name__, url_prefix='/api/products')


@products_bp.route('', methods=['POST'])
@token_required
def create_product():
    """Create a product for the current vendor (multipart field 'thumbnail')."""
    data = request_data()
    product = get_services().catalog.create(
        g.user['id'],
        product_name=data.get('productName'),
        category=data.get('category'),
        description=data.get('description'),
        price=data.get('price'),
        thumbnail=request_upload('thumbnail'),
    )
    return jsonify(product), 201


@products_bp.route('', methods=['GET'])
def list_products():
    """List all products, most recently updated first."""
    return jsonify(get_services().catalog.list()), 200


@products_bp.route('/<product_id>', methods=['GET'])
def get_product(product_id):
    return jsonify(get_services().catalog.get_by_id(product_id)), 200


@products_bp.route('/categories/<category>', methods=['GET'])
def category_products(category):
    return jsonify(get_services().catalog.list_by_category(category)), 200


@products_bp.route('/vendors/<vendor_id>', methods=['GET'])
def vendor_products(vendor_id):
    return jsonify(get_services().catalog.list_by_vendor(vendor_id)), 200


@products_bp.route('/<product_id>', methods=['PATCH'])
@token_required
def edit_product(product_id):
    """Edit a product owned by the current vendor; the thumbnail is optional."""
    data = request_data()
    product = get_services().catalog.edit(
        product_id,
        g.user['id'],
        product_name=data.get('productName'),
        category=data.get('category'),
        description=data.get('description'),
        thumbnail=request_upload('thumbnail'),
    )
    return jsonify(product), 200


@products_bp.route('/<product_id>', methods=['DELETE'])
@token_required
def delete_product(product_id):
    message = get_services().catalog.delete(product_id, g.user['id'])
    return jsonify(message), 200
