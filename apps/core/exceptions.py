"""
Custom exceptions and DRF exception handler for the agent dashboard.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ClientNotFoundError(APIException):
    """Raised when a client record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Client not found.'
    default_code = 'client_not_found'


class ClientValidationError(APIException):
    """Raised when a submitted client record fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid client record.'
    default_code = 'invalid_client'

    def __init__(self, reason):
        super().__init__(
            detail={'reason': reason.value, 'message': reason.message},
            code=reason.value,
        )
        self.reason = reason


class InvalidCredentialsError(APIException):
    """Raised when login credentials are rejected."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid username or password.'
    default_code = 'invalid_credentials'


class ProfileIncompleteError(APIException):
    """Raised when an agent has not finished profile setup."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = (
        'Profile incomplete. Fill in your name, phone and address '
        'and change your password to continue.'
    )
    default_code = 'profile_incomplete'


def custom_exception_handler(exc, context):
    """
    Custom DRF exception handler that returns consistent error responses.

    Handles all DRF exceptions and adds logging for server errors.
    """
    response = exception_handler(exc, context)

    if response is not None:
        error_data = {
            'error': True,
            'status_code': response.status_code,
            'detail': response.data,
        }
        response.data = error_data
    else:
        # Unhandled exceptions: log and return 500
        logger.exception(
            "Unhandled exception in %s",
            context.get('view', 'unknown'),
            exc_info=exc,
        )
        response = Response(
            {
                'error': True,
                'status_code': 500,
                'detail': 'An unexpected error occurred. Please try again later.',
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
