"""Typed errors raised by the services and rendered by the gateway."""


class TicketDeskError(Exception):
    status_code = 500
    code = 'internal'
    message = 'Internal server error'

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

    def to_dict(self):
        body = {'error': self.code, 'message': self.message}
        if self.details:
            body['details'] = self.details
        return body


class DuplicateEmail(TicketDeskError):
    status_code = 409
    code = 'duplicate_email'
    message = 'User already exists'


class InvalidCredentials(TicketDeskError):
    status_code = 401
    code = 'invalid_credentials'
    message = 'Invalid credentials'


class Unauthenticated(TicketDeskError):
    status_code = 401
    code = 'unauthenticated'
    message = 'No token, authorization denied'


class InvalidToken(Unauthenticated):
    code = 'invalid_token'
    message = 'Token is not valid'


class TokenExpired(Unauthenticated):
    code = 'token_expired'
    message = 'Token has expired'


class AccessDenied(TicketDeskError):
    status_code = 403
    code = 'access_denied'
    message = 'Access denied'


class NotFound(TicketDeskError):
    status_code = 404
    code = 'not_found'
    message = 'Not found'


class ValidationError(TicketDeskError):
    status_code = 400
    code = 'validation_error'
    message = 'Invalid input'


class Internal(TicketDeskError):
    pass
