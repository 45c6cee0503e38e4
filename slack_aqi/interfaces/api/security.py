# slack_aqi/interfaces/api/security.py
"""Slack request signature verification."""

import logging

from fastapi import HTTPException, Request, status
from slack_sdk.signature import SignatureVerifier

logger = logging.getLogger(__name__)


def build_signature_verifier(
    signing_secret: str, enabled: bool = True
) -> SignatureVerifier | None:
    """Create the verifier used by ``verify_slack_signature``.

    Returns:
        SignatureVerifier, or None when verification is disabled.
    """
    if not enabled:
        logger.warning("Slack signature verification is disabled")
        return None
    return SignatureVerifier(signing_secret=signing_secret)


async def verify_slack_signature(request: Request) -> None:
    """Verify the X-Slack-Signature header against the raw request body.

    The body is read (and cached on the request) before form parsing so the
    exact bytes Slack signed are checked.

    Raises:
        HTTPException: 401 if the signature or timestamp is missing or invalid.
    """
    verifier: SignatureVerifier | None = getattr(
        request.app.state, "signature_verifier", None
    )
    if verifier is None:
        return

    body = await request.body()
    if not verifier.is_valid_request(body, dict(request.headers)):
        logger.warning("Rejected request with invalid Slack signature")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Slack signature.",
        )
