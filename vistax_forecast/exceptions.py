import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger('api_requests')


class CalendarSourceError(Exception):
    """Upstream calendar feed could not be fetched"""


class MarketStateConfigError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Missing TV_WEBHOOK_SECRET env var'
    default_code = 'misconfigured'


class UnauthorizedSubmission(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized (bad secret)'
    default_code = 'unauthorized'


class InvalidSubmission(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request'
    default_code = 'invalid'


def api_exception_handler(exc, context):
    """Render DRF errors as {ok: false, error} bodies"""
    response = exception_handler(exc, context)
    if response is None:
        return None

    detail = getattr(exc, 'detail', None)
    if isinstance(detail, (list, dict)):
        message = str(exc)
    else:
        message = str(detail) if detail is not None else str(exc)

    logger.warning(f"API error {response.status_code}: {message}")
    response.data = {'ok': False, 'error': message}
    return response
