"""
Cryptoquote Game Server Application Package

This package contains the cryptoquote game server: the cipher generator,
the puzzle state engine, and the Flask HTTP layer that exposes them.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config, rng=None):
    """
    Application factory pattern for creating Flask app instances.

    Loads and validates the quote catalog, then initializes the cipher
    and game services. A missing or empty catalog is fatal here.

    Args:
        config_class: Configuration class to use
        rng: Optional random source shared by the cipher service

    Returns:
        Flask application instance with all extensions initialized
    """
    from .config.game_settings import load_quote_catalog
    from .services.cipher_service import initialize_cipher_service
    from .services.game_service import initialize_game_service

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize services
    catalog = load_quote_catalog(app.config.get('QUOTES_FILE'))
    cipher_service = initialize_cipher_service(catalog, rng)
    initialize_game_service(cipher_service, app.config.get('DEFAULT_LIVES'))

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from .controllers.quote_controller import quote_bp
    from .controllers.game_controller import game_bp

    app.register_blueprint(quote_bp)
    app.register_blueprint(game_bp, url_prefix='/api')

    return app
