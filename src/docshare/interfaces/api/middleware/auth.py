"""Auth middleware - resolves the bearer token to the requesting user."""

import falcon.asgi

from docshare.application.services.access_guard import AccessGuard


def bearer_token(req: falcon.asgi.Request) -> str | None:
    auth = req.get_header("Authorization")
    if not auth:
        return None
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class AuthMiddleware:
    """Sets ``req.context.user`` for every routed resource not marked ``auth_exempt``.

    Authentication failures propagate to the error handlers as 401.
    """

    def __init__(self, access_guard: AccessGuard) -> None:
        self._guard = access_guard

    async def process_resource(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, params
    ) -> None:
        req.context.user = None
        if resource is None or getattr(resource, "auth_exempt", False):
            return
        req.context.user = await self._guard.authenticate(bearer_token(req))
