from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .verdicts import VerificationResult

class RequestStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

class ErrorKind(Enum):
    EMPTY_INPUT = "empty_input"
    INVALID_INPUT = "invalid_input"
    BACKEND_UNAVAILABLE = "backend_unavailable"

@dataclass(frozen=True)
class RequestState:
    """Snapshot of the single-claim request lifecycle.

    ``claim`` and ``error`` are carried across transitions; only the
    orchestrator produces new snapshots.
    """
    status: RequestStatus = RequestStatus.IDLE
    claim: str = ""
    result: Optional[VerificationResult] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    request_id: int = 0

    @property
    def loading(self) -> bool:
        return self.status is RequestStatus.LOADING

    def evolve(self, **changes) -> "RequestState":
        return replace(self, **changes)
