"""
Method override middleware.

HTML forms can only send GET and POST. A form that needs PUT or DELETE
posts to `...?_method=PUT` (or DELETE) and this middleware rewrites the
request method before routing.
"""
from urllib.parse import parse_qs

from starlette.types import ASGIApp, Receive, Scope, Send

OVERRIDE_PARAM = "_method"
ALLOWED_OVERRIDES = {"PUT", "PATCH", "DELETE"}


class MethodOverrideMiddleware:
    def __init__(self, app: ASGIApp, param: str = OVERRIDE_PARAM):
        self.app = app
        self.param = param

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "POST":
            query = parse_qs(scope.get("query_string", b"").decode("latin-1"))
            values = query.get(self.param)
            if values:
                method = values[0].upper()
                if method in ALLOWED_OVERRIDES:
                    scope = dict(scope, method=method)
        await self.app(scope, receive, send)
