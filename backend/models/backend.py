from typing import TypedDict, List, Dict, Any, Optional

class WebReference(TypedDict, total=False):
    uri: str
    title: str

class GroundingChunk(TypedDict, total=False):
    """One citation entry from Gemini grounding metadata."""
    web: Optional[WebReference]

class BackendResponse(TypedDict):
    """Reply from the grounded generation backend."""
    text: str
    grounding_chunks: List[GroundingChunk]
    raw: Dict[str, Any]
