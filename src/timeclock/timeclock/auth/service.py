from __future__ import annotations

import hmac
import logging

from ..core.constants import PASSKEY_LENGTH
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


class PasskeyService:
    """Use case: unlock the admin panel with the shop's shared passkey.

    This is a convenience gate for a single counter PC, not authentication.
    """

    def __init__(self, passkey: str):
        self._passkey = str(passkey or "")

    def verify(self, attempt: str) -> None:
        attempt = (attempt or "").strip()
        if len(attempt) != PASSKEY_LENGTH or not attempt.isdigit():
            raise ValidationError(f"Passkey must be {PASSKEY_LENGTH} digits")
        if not self._passkey or not hmac.compare_digest(attempt, self._passkey):
            logger.warning("Rejected admin passkey attempt")
            raise AuthorizationError("Wrong passkey")
