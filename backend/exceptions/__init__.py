from typing import Optional, Dict, Any

class ClaimCheckException(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }

class APIException(ClaimCheckException):
    pass

class ValidationException(ClaimCheckException):
    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Validation failed for {field}: {reason}",
            {"field": field, "reason": reason}
        )

class EmptyClaimException(ValidationException):
    def __init__(self):
        super().__init__("claim", "Claim cannot be empty")

class LLMException(APIException):
    def __init__(self, reason: str, recoverable: bool = True):
        self.recoverable = recoverable
        super().__init__(
            f"LLM service error: {reason}",
            {"reason": reason, "recoverable": recoverable}
        )

class CircuitBreakerOpenException(APIException):
    def __init__(self, service_name: str, failure_count: int):
        super().__init__(
            f"Circuit breaker open for {service_name}",
            {"service": service_name, "failure_count": failure_count}
        )

class ClipboardUnavailableException(ClaimCheckException):
    def __init__(self, reason: str):
        super().__init__(
            f"Clipboard unavailable: {reason}",
            {"reason": reason}
        )
