from pydantic import BaseModel, ConfigDict, Field

class VerifyRequest(BaseModel):
    """Request body for the /verify endpoint.

    Blank claims are accepted here and rejected by the orchestrator so the
    empty-input path is the same for HTTP and in-process callers.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "claim": "The Eiffel Tower is taller than the Statue of Liberty."
            }
        }
    )

    claim: str = Field(..., max_length=20000)

class PlainTextRequest(BaseModel):
    text: str

class PlainTextResponse(BaseModel):
    text: str
