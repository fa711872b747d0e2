"""Verification of one-time login tokens against an external token store."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

from pytz import UTC

import logging

from .domain import TokenCredential
from .exceptions import TokenStoreError

logger = logging.getLogger(__name__)


class TokenStore(ABC):
    """
    Storage of issued tokens, provided by the integrator.

    Implementations should raise :class:`.TokenStoreError` (or let any other
    exception escape) when the backend fails. Returning ``False`` from
    :meth:`verify` means only that the token is not valid.
    """

    @abstractmethod
    def verify(self, token: str, uid: str) -> bool:
        """Check whether ``token`` is currently valid for ``uid``."""

    @abstractmethod
    def invalidate(self, token: str) -> None:
        """Make ``token`` unusable."""

    @abstractmethod
    def extend(self, token: str, expires: datetime) -> None:
        """Keep ``token`` valid until ``expires``."""


class TokenVerifier(object):
    """
    Turns a presented token into an authenticated marker.

    Tokens are single-use unless ``allow_token_reuse`` is set, in which case
    a successful verification extends the token by ``token_ttl`` seconds.
    """

    def __init__(self, store: TokenStore, allow_token_reuse: bool = False,
                 token_ttl: int = 3600) -> None:
        self.store = store
        self.allow_token_reuse = allow_token_reuse
        self.token_ttl = token_ttl

    def accept(self, credential: TokenCredential) -> Optional[str]:
        """
        Verify ``credential`` and consume or extend the token.

        Parameters
        ----------
        credential : :class:`.TokenCredential`

        Returns
        -------
        str or None
            The user the token belongs to, or ``None`` if the credential is
            incomplete or not valid.

        Raises
        ------
        :class:`.TokenStoreError`
            Raised when the token store fails.

        """
        if not credential.is_complete:
            return None
        token, uid = str(credential.token), str(credential.uid)
        try:
            if not self.store.verify(token, uid):
                logger.debug('Token for user %s is not valid', uid)
                return None
            if self.allow_token_reuse:
                expires = datetime.now(tz=UTC) \
                    + timedelta(seconds=self.token_ttl)
                self.store.extend(token, expires)
            else:
                self.store.invalidate(token)
        except TokenStoreError:
            logger.error('Token store failed while verifying token')
            raise
        except Exception as e:
            logger.error('Token store failed while verifying token: %s', e)
            raise TokenStoreError(f'Token store failed: {e}') from e
        logger.debug('Accepted token for user %s', uid)
        return uid
