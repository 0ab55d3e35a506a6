from fastapi import Request

ANONYMOUS_SESSION = "anonymous"


def get_ctk(request: Request) -> str:
    """Read the cookie tracking key (scan session) from the request."""
    return getattr(request.state, "ctk", None) or ANONYMOUS_SESSION
