from flask import Flask
from fitto.extensions import db, cors, migrate
from fitto.routes import register_routes
from fitto.utils.errors import register_error_handlers


def create_app(config_object="config.Config"):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize database
    db.init_app(app)

    # Initialize Flask-Migrate
    migrate.init_app(app, db)

    # CORS Configuration
    cors.init_app(app,
                  origins=app.config.get("CORS_ORIGINS", []),
                  supports_credentials=True,
                  allow_headers=["Content-Type", "Authorization"],
                  methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                  expose_headers=["Content-Type", "Authorization"])

    register_routes(app)
    register_error_handlers(app)

    with app.app_context():
        from fitto.models import user, weight_log, food_log, exercise  # noqa: F401
        db.create_all()

    return app
