"""
Package: objects_api
Local stand-in for the restful-api.dev objects API: Flask app, logging, and database
"""

import sys
from flask import Flask
from objects_api import config
from objects_api.common import log_handlers

# -----------------------------------------------------------------------------
# One global Flask app so `from objects_api import app` returns the instance
# with its routes registered; create_app() returns the same app
# -----------------------------------------------------------------------------
app = Flask(__name__)
app.config.from_object(config)

from objects_api.models import db  # pylint: disable=wrong-import-position
db.init_app(app)

with app.app_context():
    # routes bind to current_app, so import them only once the app exists
    from objects_api import routes, models  # noqa: F401  pylint: disable=unused-import, wrong-import-position
    from objects_api.common import error_handlers  # noqa: F401  pylint: disable=unused-import, wrong-import-position

    try:
        db.create_all()
    except Exception as err:  # pylint: disable=broad-except
        app.logger.critical("%s: Cannot continue", err)
        sys.exit(4)

    log_handlers.init_logging(app, "gunicorn.error")

    app.logger.info(70 * "*")
    app.logger.info("  O B J E C T S   A P I   S T A N D - I N  ".center(70, "*"))
    app.logger.info(70 * "*")


def create_app():
    """Factory-style accessor to the (already created) global app."""
    return app
