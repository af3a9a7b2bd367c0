from flask import jsonify


class BooklyError(Exception):
    """Base error carrying the HTTP status a route should answer with."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_response(self):
        return jsonify({'message': self.message}), self.status_code


class NotFoundError(BooklyError):
    status_code = 404


class UnauthorizedError(BooklyError):
    status_code = 403


class ValidationFailure(BooklyError):
    status_code = 400


class UpstreamFailure(BooklyError):
    """A call to the chat platform or an aggregation failed."""
    status_code = 500


def failure_response(error):
    """Structured failure body for anything raised inside a route."""
    if isinstance(error, BooklyError):
        return error.to_response()
    return jsonify({'message': str(error)}), 500
