from __future__ import annotations

import logging
from typing import Mapping
from urllib.parse import urlsplit, urlunsplit

from twilio.request_validator import RequestValidator


logger = logging.getLogger(__name__)


def verify_twilio_signature(
    url: str,
    params: Mapping[str, str],
    signature_header: str | None,
    auth_token: str | None,
    env: str,
) -> bool:
    """
    Check X-Twilio-Signature for a webhook POST.

    Without a configured auth token there is nothing to check against, so the request is
    accepted. A missing signature is tolerated in dev/local only.
    """
    if not auth_token:
        return True

    if not signature_header:
        if env.lower() in {"dev", "local"}:
            logger.warning("Missing Twilio signature; accepting in dev mode")
            return True
        return False

    validator = RequestValidator(auth_token)
    return validator.validate(url, dict(params), signature_header)


def public_url(request_url: str, public_base_url: str | None) -> str:
    """Rebuild the URL Twilio signed when the app runs behind a proxy or tunnel."""
    if not public_base_url:
        return request_url
    base = urlsplit(public_base_url)
    url = urlsplit(request_url)
    return urlunsplit((base.scheme, base.netloc, base.path.rstrip("/") + (url.path or "/"), url.query, ""))
