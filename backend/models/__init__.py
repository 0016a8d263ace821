from .verdicts import (
    Verdict,
    VERDICTS,
    Source,
    VerificationResult,
)
from .state import (
    RequestStatus,
    ErrorKind,
    RequestState,
)
from .backend import (
    WebReference,
    GroundingChunk,
    BackendResponse,
)
from .claims import (
    VerifyRequest,
    PlainTextRequest,
    PlainTextResponse,
)

__all__ = [
    "Verdict",
    "VERDICTS",
    "Source",
    "VerificationResult",

    "RequestStatus",
    "ErrorKind",
    "RequestState",

    "WebReference",
    "GroundingChunk",
    "BackendResponse",

    "VerifyRequest",
    "PlainTextRequest",
    "PlainTextResponse",
]
