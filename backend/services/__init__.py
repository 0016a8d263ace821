from .llm import generate_grounded
from .parser import parse_backend_response, parse_verification_result, build_sources, ParsedResponse, ParseStatus
from .orchestrator import RequestOrchestrator
from .clipboard import copy_plain_text, strip_markup

__all__ = [
    "generate_grounded",
    "parse_backend_response",
    "parse_verification_result",
    "build_sources",
    "ParsedResponse",
    "ParseStatus",
    "RequestOrchestrator",
    "copy_plain_text",
    "strip_markup",
]
