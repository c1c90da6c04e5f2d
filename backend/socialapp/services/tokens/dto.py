# socialapp/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified token content.

    :param user_id: Subject user identifier.
    :type user_id: int
    :param token_type: ``"access"`` or ``"refresh"``.
    :type token_type: str
    :param expires_at: Expiry instant (UTC).
    :type expires_at: datetime
    """

    user_id: int
    token_type: str
    expires_at: datetime
