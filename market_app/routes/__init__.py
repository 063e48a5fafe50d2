from .vendors import vendors_bp
from .products import products_bp

__all__ = ['vendors_bp', 'products_bp']
