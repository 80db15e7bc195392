# groupware/services/refresh_tokens/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta

from groupware.models.refresh_token import RefreshToken
from groupware.services._shared.base import BaseService
from groupware.services._shared.errors import ErrorCode, TokenError
from groupware.services._shared.ports import Clock, SystemClock, TokenSigner
from groupware.services.refresh_tokens.dto import RefreshTokenConfig
from groupware.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class RefreshTokenService(BaseService):
    """
    Refresh token lifecycle service (issue / validate / revoke / purge).

    Tokens are signed through a pluggable :class:`TokenSigner` and persisted
    through the Unit of Work's ``refresh_tokens`` store. Every identity holds
    at most one stored token: issuing a new one deletes the previous row
    before saving the new row, inside the same Unit of Work.
    """

    def __init__(
        self,
        *,
        signer: TokenSigner,
        clock: Clock | None = None,
        token_cfg: RefreshTokenConfig | None = None,
        uow_factory: Callable[[], UnitOfWork] | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param signer: Adapter producing signed token strings.
        :param clock: Time source for expiry computation and checks.
        :param token_cfg: Refresh token lifetime configuration.
        :param uow_factory: Unit of Work factory (defaults to SQLAlchemy).
        """
        super().__init__(uow_factory=uow_factory)
        self.signer = signer
        self.clock = clock or SystemClock()
        self.cfg = token_cfg or RefreshTokenConfig(ttl=timedelta(days=7))

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def create(self, identity: str, role: str) -> str:
        """
        Sign a refresh token for ``identity`` and store it, replacing any
        token the identity already holds.

        :param identity: Subject (e.g. account email).
        :param role: Role claim embedded in the token.
        :returns: The raw signed token.
        :raises ValueError: If ``identity`` or ``role`` is blank.
        """
        if not identity.strip() or not role.strip():
            raise ValueError("identity and role are required.")

        # Signer failures propagate before anything is touched in the store
        token_value = self.signer.sign(identity, role, self.cfg.ttl)
        issued_at = self.clock.now()

        with self.rw_uow() as uow:
            store = uow.refresh_tokens
            existing = store.find_by_identity(identity)
            if existing is not None:
                store.delete(existing)
                log.info("refresh_token.replaced", extra={"identity": identity})
            store.save(
                RefreshToken(
                    identity=identity,
                    token_value=token_value,
                    expiration_date=issued_at + self.cfg.ttl,
                )
            )

        log.info("refresh_token.issued", extra={"identity": identity})
        return token_value

    # ------------------------------------------------------------------ #
    # Validate
    # ------------------------------------------------------------------ #

    def validate(self, token_value: str) -> RefreshToken:
        """
        Return the stored, unexpired record for ``token_value``.

        An expired record is deleted (and the deletion committed) before the
        error is raised, so presenting it again yields ``INVALID_TOKEN``.

        :raises TokenError: ``INVALID_TOKEN`` when unknown,
            ``EXPIRED_TOKEN`` when past its expiration date.
        """
        expired_identity: str | None = None
        with self.rw_uow() as uow:
            token = uow.refresh_tokens.find_by_value(token_value)
            if token is not None and token.is_expired(self.clock.now()):
                expired_identity = token.identity
                uow.refresh_tokens.delete(token)

        if token is None:
            log.info("refresh_token.invalid", extra={"error_code": ErrorCode.INVALID_TOKEN.value})
            raise TokenError(ErrorCode.INVALID_TOKEN)

        if expired_identity is not None:
            log.info(
                "refresh_token.expired",
                extra={"identity": expired_identity, "error_code": ErrorCode.EXPIRED_TOKEN.value},
            )
            raise TokenError(ErrorCode.EXPIRED_TOKEN)

        return token

    # ------------------------------------------------------------------ #
    # Housekeeping
    # ------------------------------------------------------------------ #

    def revoke(self, identity: str) -> bool:
        """Delete the token held by ``identity`` (logout).

        :returns: ``True`` if a token existed.
        """
        with self.rw_uow() as uow:
            token = uow.refresh_tokens.find_by_identity(identity)
            if token is not None:
                uow.refresh_tokens.delete(token)

        if token is None:
            return False
        log.info("refresh_token.revoked", extra={"identity": identity})
        return True

    def purge_expired(self) -> int:
        """Delete every stored token past its expiration date.

        :returns: Number of tokens removed.
        """
        with self.rw_uow() as uow:
            count = uow.refresh_tokens.delete_expired(self.clock.now())
        log.info("refresh_token.purged", extra={"count": count})
        return count
