import base64
import secrets

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from phpass_verify.auth_utils import verify_stored_credential


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Optional HTTP Basic Auth. The stored password may be a bcrypt, PHPass or plaintext value."""

    # Paths that never require auth
    PUBLIC_PATHS = {"/api/ping"}

    def __init__(self, app, get_settings_fn):
        super().__init__(app)
        self._get_settings = get_settings_fn

    async def dispatch(self, request: Request, call_next) -> Response:
        settings = self._get_settings()

        if not settings.is_auth_configured:
            return await call_next(request)

        if request.url.path in self.PUBLIC_PATHS:
            return await call_next(request)

        # Check Authorization header
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Basic "):
            try:
                decoded = base64.b64decode(auth_header[6:]).decode("utf-8")
                username, password = decoded.split(":", 1)
                if secrets.compare_digest(
                    username.encode(), settings.auth_username.encode()
                ) and await run_in_threadpool(
                    verify_stored_credential,
                    password,
                    settings.auth_password,
                    settings.max_count_log2,
                ):
                    return await call_next(request)
            except Exception:
                pass

        return Response(
            status_code=401,
            headers={"WWW-Authenticate": 'Basic realm="phpass-verify"'},
            content="Unauthorized",
        )
