from django.conf import settings

# DRF builds Allow from a set, so order it here
METHOD_ORDER = ('GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS')


def allowed_origin(request) -> str:
    """Configured origin, else the default of the resolved route, else *"""
    if settings.VISTAX_ALLOWED_ORIGIN:
        return settings.VISTAX_ALLOWED_ORIGIN
    match = getattr(request, 'resolver_match', None)
    url_name = match.url_name if match else None
    return settings.VISTAX_DEFAULT_ORIGINS.get(url_name, '*')


class CorsMiddleware:
    """
    Adds CORS headers to API responses so Webflow/kazpa.io can call them.

    Allowed methods mirror the Allow header DRF sets for the view.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        if not request.path.startswith(settings.VISTAX_API_PREFIX):
            return response

        allowed = {m.strip().upper() for m in response.get('Allow', 'GET, OPTIONS').split(',')}
        response['Access-Control-Allow-Origin'] = allowed_origin(request)
        response['Access-Control-Allow-Methods'] = ','.join(m for m in METHOD_ORDER if m in allowed)
        response['Access-Control-Allow-Headers'] = 'Content-Type'
        return response
