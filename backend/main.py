from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import check_api_keys_on_startup, logger
from middleware import RequestContextMiddleware
from models import (
    ErrorKind,
    PlainTextRequest,
    PlainTextResponse,
    RequestStatus,
    VerificationResult,
    VerifyRequest,
)
from services import RequestOrchestrator, strip_markup


@asynccontextmanager
async def lifespan(app: FastAPI):
    check_api_keys_on_startup()
    yield


app = FastAPI(title="ClaimCheck API", lifespan=lifespan)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_orchestrator() -> RequestOrchestrator:
    return RequestOrchestrator()


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "ClaimCheck API is running."}


@app.post("/verify", response_model=VerificationResult)
async def verify(req: VerifyRequest, orchestrator: RequestOrchestrator = Depends(get_orchestrator)):
    state = await orchestrator.submit(req.claim)

    if state.error_kind in (ErrorKind.EMPTY_INPUT, ErrorKind.INVALID_INPUT):
        raise HTTPException(status_code=400, detail=state.error)
    if state.status is RequestStatus.FAILED:
        raise HTTPException(status_code=502, detail=state.error)
    if state.status is not RequestStatus.SUCCEEDED or state.result is None:
        logger.error("Verification ended in unexpected state %s", state.status)
        raise HTTPException(status_code=500, detail="Verification did not complete.")

    logger.info(
        "Verified claim '%s...' as %s (%s%%) with %d sources.",
        state.claim[:50],
        state.result.verdict,
        state.result.truth_percentage,
        len(state.result.sources),
    )
    return state.result


@app.post("/verify/plain-text", response_model=PlainTextResponse)
async def plain_text(req: PlainTextRequest):
    return PlainTextResponse(text=strip_markup(req.text))
