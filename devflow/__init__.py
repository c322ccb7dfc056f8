from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

import config

db = SQLAlchemy()
migrate = Migrate()

def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # DB + Migrate
    db.init_app(app)
    migrate.init_app(app, db)

    # load models
    from . import models

    from .errors import register_error_handlers
    register_error_handlers(app)

    # blueprints
    from .views import (
        question_views,
        answer_views,
        user_views,
        search_views,
    )

    app.register_blueprint(question_views.bp)
    app.register_blueprint(answer_views.bp)
    app.register_blueprint(user_views.bp)
    app.register_blueprint(search_views.bp)
    return app
