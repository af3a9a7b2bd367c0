import click
from flask import Flask

from Bookly.app.config import Config
from Bookly.app.logger import configure_logging
from Bookly.app.utils import MongoJSONProvider


def create_app(config_object=None, mongo_client=None, chat_client=None):
    """
    Application Factory Pattern to initialize the Flask App.
    ``mongo_client`` and ``chat_client`` are built from the configuration when not given.
    """
    # 1. Initialize the Flask application
    app = Flask(__name__)
    app.json = MongoJSONProvider(app)

    # 2. Load configuration
    app.config.from_object(config_object or Config)
    configure_logging(app.config['LOG_LEVEL'])

    # 3. Attach the order store and the chat platform client
    # Imports are done here to avoid circular import errors
    from Bookly.mongodb_database import connection
    from Bookly.booking_analytics.chat_platform import BotpressTablesClient

    connection.init_app(app, mongo_client)
    app.extensions['chat_client'] = chat_client or BotpressTablesClient.from_config(app.config)

    # 4. Register Blueprints
    from Bookly.app.routes.orders import orders_bp
    from Bookly.app.routes.conversations import conversations_bp

    app.register_blueprint(orders_bp)
    app.register_blueprint(conversations_bp)

    # 5. CLI
    @app.cli.command('init-db')
    def init_db_command():
        """Apply collection validators and create the order indexes."""
        from Bookly.mongodb_database.bootstrap import init_db

        init_db(connection.get_db())
        click.echo("Database initialised.")

    return app
