"""
Vendor Market API - Flask Application (MongoDB)
Port: 5000 (PORT)
"""
import logging
from typing import Optional

from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from pymongo import MongoClient
from werkzeug.exceptions import HTTPException

from shared.config import AppConfig
from shared.database.mongo import MongoDatabase
from shared.errors import ApiError
from market_app.routes import products_bp, vendors_bp
from market_app.services import MarketServices

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None, mongo_client: Optional[MongoClient] = None) -> Flask:
    """Create and configure the Flask application."""
    config = config or AppConfig.from_env()
    if not config.jwt_secret:
        raise RuntimeError("JWT_SECRET is not set; refusing to start without a signing key.")

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )

    app = Flask(__name__)
    app.config['JWT_SECRET_KEY'] = config.jwt_secret
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = config.token_expires
    app.config['MAX_CONTENT_LENGTH'] = config.max_content_length

    CORS(app, supports_credentials=True, origins=config.cors_origins or '*')
    JWTManager(app)

    database = MongoDatabase(config, client=mongo_client)
    database.ensure_indexes()
    app.extensions['market'] = MarketServices.build(config, database)

    app.register_blueprint(vendors_bp)
    app.register_blueprint(products_bp)

    # ========================================================================
    # STATIC UPLOADS
    # ========================================================================

    @app.route('/uploads/<path:filename>')
    def serve_uploaded_file(filename):
        return send_from_directory(config.upload_folder, filename)

    # ========================================================================
    # ERROR HANDLERS
    # ========================================================================

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'message': f'Not Found - {request.path}'}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({'message': 'An unknown error occurred.'}), 500

    return app


if __name__ == '__main__':
    app_config = AppConfig.from_env()
    app = create_app(app_config)
    app.run(host='0.0.0.0', port=app_config.port)
