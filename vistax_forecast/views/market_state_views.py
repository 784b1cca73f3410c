from rest_framework import status
from rest_framework.decorators import api_view, parser_classes
from rest_framework.exceptions import APIException
from rest_framework.parsers import JSONParser
from rest_framework.response import Response
from ..parsers import PlainTextJSONParser
from ..services import build_market_state_service
import logging

# Configure logging
logger = logging.getLogger('api_requests')


def _store_error(e: Exception) -> Response:
    logger.error(f"Market state store error: {str(e)}", exc_info=True)
    return Response({
        'ok': False,
        'error': str(e) or 'Market state store error'
    }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET', 'POST', 'OPTIONS'])
@parser_classes([JSONParser, PlainTextJSONParser])
def tv_signal(request):
    """Read (public) or overwrite (shared secret) the latest market state"""
    if request.method == 'OPTIONS':
        return Response(status=status.HTTP_204_NO_CONTENT)

    service = build_market_state_service()

    if request.method == 'GET':
        try:
            value = service.read()
        except Exception as e:
            return _store_error(e)
        return Response({
            'ok': True,
            'value': value.to_dict() if value else None
        })

    logger.info("Market state webhook called")

    # Configuration is checked before the body is parsed
    service.ensure_configured()
    try:
        state = service.submit(request.data)
    except APIException:
        # 400/401/500 responses rendered by the API exception handler
        raise
    except Exception as e:
        return _store_error(e)

    return Response({
        'ok': True,
        'saved': state.ts,
        'payload': state.to_dict()
    })
