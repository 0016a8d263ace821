import asyncio
import itertools
from typing import Awaitable, Callable, List, Optional

from config import logger
from config.constants import LLM_CONFIG, MESSAGES
from exceptions import EmptyClaimException, ValidationException
from models.backend import BackendResponse
from models.state import ErrorKind, RequestState, RequestStatus
from prompts import build_fact_check_prompt
from utils.validation import InputValidator
from .llm import generate_grounded
from .parser import parse_backend_response

Generate = Callable[[str], Awaitable[BackendResponse]]
Listener = Callable[[RequestState], None]


class RequestOrchestrator:
    """
    Owns the lifecycle of one claim verification at a time.

    State moves Idle -> Loading -> Succeeded | Failed. Every submit gets a
    monotonically increasing request id; a reply that arrives after a newer
    submit has started is dropped, so only the latest submit can write the
    outcome. Readers observe snapshots via ``state`` or ``subscribe``.
    """

    def __init__(
        self,
        generate: Optional[Generate] = None,
        timeout: Optional[float] = LLM_CONFIG.VERIFY_TIMEOUT,
    ):
        self._generate = generate or generate_grounded
        self._timeout = timeout
        self._state = RequestState()
        self._listeners: List[Listener] = []
        self._ids = itertools.count(1)
        self._latest_id = 0

    @property
    def state(self) -> RequestState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_claim(self, claim: str) -> RequestState:
        return self._transition(claim=claim)

    async def submit(self, claim_text: Optional[str] = None) -> RequestState:
        """
        Verify a claim and return the resulting state snapshot.
        Args:
            claim_text: Claim to verify; defaults to the stored claim
        Returns:
            The state after this request settles. If a newer submit started
            meanwhile, the newer request's state is returned untouched.
        """
        if claim_text is not None:
            self._transition(claim=claim_text)

        try:
            claim = InputValidator.sanitize_claim(self._state.claim)
        except EmptyClaimException:
            logger.info("Rejected empty claim without calling the backend.")
            return self._transition(error=MESSAGES.EMPTY_INPUT, error_kind=ErrorKind.EMPTY_INPUT)
        except ValidationException as e:
            logger.info("Rejected invalid claim: %s", e.message)
            return self._transition(error=e.details.get("reason", e.message), error_kind=ErrorKind.INVALID_INPUT)

        request_id = next(self._ids)
        self._latest_id = request_id
        self._transition(
            status=RequestStatus.LOADING,
            result=None,
            error=None,
            error_kind=None,
            request_id=request_id,
        )

        settled = False
        try:
            response = await self._call_backend(claim)
            parsed = parse_backend_response(response.get("text"), response.get("grounding_chunks"))
            if self._is_current(request_id):
                self._transition(status=RequestStatus.SUCCEEDED, result=parsed.result)
            else:
                logger.info(
                    "Discarded stale response for request %s; request %s is newer.",
                    request_id, self._latest_id
                )
            settled = True
        except Exception as e:
            if self._is_current(request_id):
                logger.exception(
                    "Error verifying claim",
                    extra={"request_id": request_id, "error_type": type(e).__name__}
                )
                self._fail()
            else:
                logger.info(
                    "Discarded failure of stale request %s; request %s is newer: %s",
                    request_id, self._latest_id, e
                )
            settled = True
        finally:
            if not settled and self._is_current(request_id):
                logger.warning("Request %s was interrupted before settling.", request_id)
                self._fail()

        return self._state

    def _fail(self) -> None:
        self._transition(
            status=RequestStatus.FAILED,
            error=MESSAGES.BACKEND_FAILURE,
            error_kind=ErrorKind.BACKEND_UNAVAILABLE,
        )

    async def _call_backend(self, claim: str) -> BackendResponse:
        prompt = build_fact_check_prompt(claim)
        if self._timeout is None:
            return await self._generate(prompt)
        return await asyncio.wait_for(self._generate(prompt), timeout=self._timeout)

    def _is_current(self, request_id: int) -> bool:
        return request_id == self._latest_id

    def _transition(self, **changes) -> RequestState:
        self._state = self._state.evolve(**changes)
        self._notify()
        return self._state

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener %r failed", listener)
