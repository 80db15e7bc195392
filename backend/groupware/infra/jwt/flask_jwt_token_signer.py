# groupware/infra/jwt/flask_jwt_token_signer.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import cast

from groupware.services._shared.ports import TokenSigner

ROLE_CLAIM = "role"


@dataclass(slots=True)
class FlaskJWTTokenSigner(TokenSigner):
    """
    Adapter for Flask-JWT-Extended.

    Issues refresh-type JWTs (``"type": "refresh"``) carrying the identity as
    ``sub`` and the role as an extra claim. Each token gets a fresh ``jti``,
    so two tokens signed for the same identity never collide.

    .. note::
       Requires an active Flask app context with ``JWT_SECRET_KEY`` set.
    """

    role_claim: str = ROLE_CLAIM

    def sign(self, identity: str, role: str, ttl: timedelta) -> str:
        from flask_jwt_extended import create_refresh_token

        return cast(
            str,
            create_refresh_token(
                identity=identity,
                additional_claims={self.role_claim: role},
                expires_delta=ttl,
            ),
        )
