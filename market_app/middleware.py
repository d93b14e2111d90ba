"""
Request plumbing for the market: the per-client token cookie, store
injection and request timing.
"""

import logging
import time

from django.apps import apps
from django.conf import settings
from django.utils.deprecation import MiddlewareMixin

from .tokens import new_user_token

logger = logging.getLogger(__name__)


class UserTokenMiddleware(MiddlewareMixin):
    """
    Attach the shared store and the client's opaque token to each request.

    The token only correlates a browser with its favorites list; it is
    issued once and read back from the cookie on every later request.
    """

    def process_request(self, request):
        request.store = apps.get_app_config("market_app").store

        cookie_name = settings.MARKET_USER_COOKIE
        token = request.COOKIES.get(cookie_name)
        request._issue_token = not token
        if not token:
            token = new_user_token()
            logger.debug(f"Issued user token {token}")
        request.user_token = token

    def process_response(self, request, response):
        if getattr(request, "_issue_token", False):
            response.set_cookie(
                settings.MARKET_USER_COOKIE,
                request.user_token,
                max_age=settings.MARKET_USER_COOKIE_AGE,
                samesite="Lax",
            )
        return response


class RequestTimingMiddleware(MiddlewareMixin):
    """
    Log one line per request.

    Output format:
    METHOD /path/ - XXX.XXms - STATUS
    """

    def process_request(self, request):
        request._start_time = time.time()

    def process_response(self, request, response):
        if hasattr(request, "_start_time"):
            duration_ms = (time.time() - request._start_time) * 1000
            path = request.path

            # Skip static files for cleaner output
            if not path.startswith(settings.STATIC_URL):
                logger.info(
                    f"{request.method:4s} {path:40s} {duration_ms:7.2f}ms {response.status_code}"
                )

        return response
