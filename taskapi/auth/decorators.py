"""
Flask route decorator for authentication.

Provides:
- jwt_required: run the request through the AuthorizationGate and pass the
  authenticated RequestContext to the view as `ctx`
"""
from functools import wraps

from flask import current_app, g, request

from .gate import RequestContext


def get_auth_components():
    """Return the AuthComponents bundle registered by create_app()."""
    return current_app.extensions["taskapi.auth"]


def jwt_required(f):
    """Decorator to require a valid access token for an endpoint.

    Every rejection cause produces the same 401 response. On success the
    view is called with `ctx=<RequestContext>` holding the verified claims.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        ctx = RequestContext(
            request_id=getattr(g, "request_id", ""),
            authorization=request.headers.get("Authorization"),
        )
        ctx = get_auth_components().gate.require(ctx)

        # Read by the request logger only
        g.current_user = ctx.user_id

        return f(*args, ctx=ctx, **kwargs)
    return decorated
