import logging

from flask import Flask
from flask_cors import CORS
from config import Config


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Session cookie carries the backend token, so credentials must be allowed
    CORS(app, origins=[app.config['FRONTEND_URL']], supports_credentials=True)

    # Register Blueprint
    from tourmarket.api import api_bp
    app.register_blueprint(api_bp)

    from tourmarket.utils.api_response import APIResponse

    @app.errorhandler(404)
    def not_found(error):
        return APIResponse.not_found()

    @app.errorhandler(405)
    def method_not_allowed(error):
        return APIResponse.error("Method not allowed", status_code=405)

    return app
