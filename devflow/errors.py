from flask import jsonify


class ForumError(Exception):
    """Base class for errors raised by forum actions."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(ForumError): # target entity does not exist
    status_code = 404


class ValidationError(ForumError): # malformed parameters
    status_code = 400


class PersistenceError(ForumError): # database failure
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(ForumError)
    def handle_forum_error(error: ForumError):
        message = error.message
        if isinstance(error, PersistenceError):
            # driver messages stay in the log
            message = "Database error."
        return jsonify({"success": False, "error": message}), error.status_code
