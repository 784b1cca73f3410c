from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from ..services import build_forecast_service
import logging

# Configure logging
logger = logging.getLogger('api_requests')

CACHE_CONTROL = 's-maxage=300, stale-while-revalidate=600'


@api_view(['GET', 'OPTIONS'])
def vistax_forecast(request):
    """7-day VistaX routine forecast"""
    if request.method == 'OPTIONS':
        return Response(status=status.HTTP_204_NO_CONTENT)

    logger.info("Forecast API called")

    try:
        body = build_forecast_service().build_forecast()
    except Exception as e:
        logger.error(f"Error building forecast: {str(e)}", exc_info=True)
        return Response({
            'ok': False,
            'error': str(e) or 'Unknown error'
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = Response(body)
    # Safe to cache briefly at the edge
    response['Cache-Control'] = CACHE_CONTROL
    return response
