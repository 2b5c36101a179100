import logging

from flask import Flask, jsonify
from .extensions import db, migrate, login_manager
from .config import Config
from .services.errors import ValidationError

from .blueprints.auth.routes import auth_bp
from .blueprints.budget.routes import budget_bp
from .blueprints.expenses.routes import expenses_bp
from .blueprints.activities.routes import activities_bp


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger("budgetplanner").setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"ok": False, "message": "Authentication required"}), 401

    # Ensure tables exist for a smooth first run
    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(budget_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(activities_bp)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err):
        db.session.rollback()
        return jsonify({"ok": False, "message": err.message, "field": err.field}), 400

    @app.route("/")
    def root():
        return jsonify({"ok": True, "service": "budgetplanner"})

    return app
