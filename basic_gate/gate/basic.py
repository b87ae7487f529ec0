"""
BasicAuthGate: the Basic authentication decision for one request.

Responsibilities:
    - Extract the credential pair from the Authorization header
    - Look up the stored hash in an injected credential store
    - Verify the password with bcrypt
    - Forward to the downstream continuation only when all three succeed
    - Re-check the final status after the continuation returns

Design notes:
    - Stateless across requests; nothing is cached here (see `CachedGate`).
    - Every client-reachable failure (malformed header, unknown user, wrong
      password, unreadable hash) produces the same 401 response, so clients
      cannot tell which stage failed. The stage is only logged at DEBUG.
    - Unknown users still pay for one bcrypt comparison, so response time
      does not reveal whether a user id exists.
    - The bcrypt comparison and the store lookup are blocking, so they run in
      the framework threadpool instead of on the event loop.
    - `dispatch` matches Starlette's `BaseHTTPMiddleware` dispatch signature.

LLM Prompt Example:
    "Explain how a Basic auth middleware can avoid leaking whether a user
    exists by collapsing every failure into one identical 401 response."
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from fastapi import Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from ..config import BCRYPT_COST, REALM, UNAUTHORIZED_BODY
from ..errors import VerificationError
from ..store.base import BaseCredentialStore
from .credentials import get_credentials
from .verifier import BcryptVerifier, hash_password

__all__ = ["CallNext", "GateOutcome", "BasicAuthGate", "is_unauthorized"]

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]


def is_unauthorized(response: Response) -> bool:
    return response.status_code == status.HTTP_401_UNAUTHORIZED


@dataclass(frozen=True)
class GateOutcome:
    """
    Result of running a request through a gate.

    Attributes:
        response (Response): What goes back to the client.
        accepted (bool): True only if the credentials verified AND the final
            status is not 401.
    """
    response: Response
    accepted: bool


class BasicAuthGate:
    """
    Basic authentication gate backed by a credential store.

    Args:
        store (BaseCredentialStore): Source of stored password hashes.
        verifier (Optional[BcryptVerifier]): Hash comparison, bcrypt by default.
        realm (str): Realm advertised in the WWW-Authenticate challenge.

    Unknown user ids are still run through one bcrypt comparison against a
    throwaway hash made at the store's work factor, so they cost the same as
    a wrong password.
    """

    def __init__(
        self,
        store: BaseCredentialStore,
        verifier: Optional[BcryptVerifier] = None,
        realm: str = REALM,
    ):
        self.store = store
        self.verifier = verifier or BcryptVerifier()
        self.realm = realm
        self._dummy_hash = hash_password("", getattr(store, "cost", BCRYPT_COST))

    def require_auth(self) -> Response:
        """Build the 401 challenge that starts (or restarts) authentication."""
        return PlainTextResponse(
            UNAUTHORIZED_BODY,
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": f'Basic realm="{self.realm}"'},
        )

    def check(self, authorization: Optional[str]) -> bool:
        """
        Decide synchronously whether `authorization` carries valid credentials.

        Blocks for the duration of the bcrypt comparison.
        """
        user_id, password = get_credentials(authorization)
        if not user_id:
            logger.debug("Rejected: missing or malformed Basic credentials")
            return False

        hashed_password, found = self.store.get(user_id)
        if not found or hashed_password is None:
            try:
                self.verifier.compare(self._dummy_hash, password)
            except VerificationError as exc:
                logger.debug("Dummy comparison failed (%s)", exc)
            logger.debug("Rejected: unknown user id")
            return False

        try:
            matched = self.verifier.compare(hashed_password, password)
        except VerificationError as exc:
            logger.warning("Rejected: stored hash could not be verified (%s)", exc)
            return False

        if not matched:
            logger.debug("Rejected: password mismatch")
        return matched

    async def authenticate(self, authorization: Optional[str]) -> bool:
        """Async wrapper around `check`, run in the threadpool."""
        return await run_in_threadpool(self.check, authorization)

    async def handle(self, request: Request, call_next: CallNext) -> GateOutcome:
        """
        Authenticate `request` and, on success, run the downstream continuation.

        Exceptions raised by `call_next` propagate unchanged.
        """
        if not await self.authenticate(request.headers.get("Authorization")):
            return GateOutcome(self.require_auth(), accepted=False)

        response = await call_next(request)

        # Downstream may still refuse the request on its own.
        if is_unauthorized(response):
            logger.info("Downstream returned 401 for verified credentials")
            return GateOutcome(response, accepted=False)
        return GateOutcome(response, accepted=True)

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        outcome = await self.handle(request, call_next)
        return outcome.response
