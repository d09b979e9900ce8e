"""
Cryptoquote Game Server - Main Entry Point

This is the main entry point for the cryptoquote game server.
It loads the quote catalog, initializes all services and starts the
Flask application.
"""

from cryptoquote import create_app
from cryptoquote.config import Config, get_catalog_statistics
from cryptoquote.exceptions import EmptyCatalogError
from cryptoquote.services.cipher_service import get_cipher_service
from cryptoquote.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Quote catalog loaded and services initialized")

        catalog = get_cipher_service().catalog
        stats = get_catalog_statistics([{"text": q.text, "author": q.author} for q in catalog])
        print(f"✓ {stats['total_quotes']} quotes available")

        game_logger.logger.info("Cryptoquote Server Starting")

        print(f"\nStarting Cryptoquote Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Cryptoquote Server shutting down (KeyboardInterrupt)")
    except EmptyCatalogError as e:
        print(f"No quotes configured: {e}")
        game_logger.logger.error(f"No quotes configured: {e}")
        raise
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
