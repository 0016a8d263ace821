from dataclasses import dataclass

@dataclass(frozen=True)
class LLMConfig:
    REQUEST_TIMEOUT: float = 60.0
    VERIFY_TIMEOUT: float = 90.0
    MAX_ATTEMPTS: int = 3
    RETRY_BASE_DELAY: float = 1.0
    RETRY_MAX_DELAY: float = 10.0

@dataclass(frozen=True)
class RateLimits:
    """Calls per second allowed against each external API."""
    GEMINI: float = 5.0

@dataclass(frozen=True)
class ResilienceConfig:
    FAILURE_THRESHOLD: int = 5
    RECOVERY_TIMEOUT: float = 60.0

@dataclass(frozen=True)
class VerificationConfig:
    MAX_CLAIM_LENGTH: int = 5000
    MIN_TRUTH_PERCENTAGE: int = 0
    MAX_TRUTH_PERCENTAGE: int = 100
    ANALYSIS_MARKER: str = "[ANALYSIS]"

@dataclass(frozen=True)
class Messages:
    """User-facing strings. Diagnostic detail goes to the log, not here."""
    EMPTY_INPUT: str = "Please enter a claim to verify."
    BACKEND_FAILURE: str = (
        "Failed to get a response from the AI. "
        "Please check the server logs for more details."
    )
    DEGRADED_ANALYSIS_PREFIX: str = (
        "The AI's response was not in the expected format. "
        "It might be that this claim cannot be verified with the available information."
    )

LLM_CONFIG = LLMConfig()
RATE_LIMITS_PER_SECOND = RateLimits()
RESILIENCE_CONFIG = ResilienceConfig()
VERIFICATION_CONFIG = VerificationConfig()
MESSAGES = Messages()
