from typing import Literal, Tuple, get_args
from pydantic import BaseModel, ConfigDict, Field

Verdict = Literal["True", "False", "Mixed", "Unverifiable"]

VERDICTS: Tuple[str, ...] = get_args(Verdict)

class Source(BaseModel):
    """A web page the backend cited while grounding its answer."""
    model_config = ConfigDict(frozen=True)

    uri: str
    title: str

class VerificationResult(BaseModel):
    """Typed outcome of one fact-check. Replaced wholesale, never mutated."""
    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    truth_percentage: int = Field(..., ge=0, le=100)
    analysis: str
    sources: Tuple[Source, ...] = ()

