import hmac
from typing import Optional

from fastapi import Header, Request

from .errors import UnauthorizedError

UNAUTHORIZED_MESSAGE = "Unauthorized - Invalid API Key"


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    """Reject the request unless the x-api-key header equals the configured key."""
    expected = request.app.state.settings.api_key
    if not x_api_key or not hmac.compare_digest(x_api_key.encode(), expected.encode()):
        raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
