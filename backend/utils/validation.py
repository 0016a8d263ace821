import re

from config import VERIFICATION_CONFIG
from exceptions import EmptyClaimException, ValidationException

class InputValidator:

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')
    WHITESPACE_PATTERN = re.compile(r'\s+')

    @staticmethod
    def is_blank(claim) -> bool:
        return claim is None or not str(claim).strip()

    @staticmethod
    def sanitize_claim(claim: str) -> str:
        if InputValidator.is_blank(claim):
            raise EmptyClaimException()

        claim = InputValidator.CONTROL_CHARS_PATTERN.sub('', claim.strip())

        claim = InputValidator.WHITESPACE_PATTERN.sub(' ', claim)

        if not claim:
            raise EmptyClaimException()

        if len(claim) > VERIFICATION_CONFIG.MAX_CLAIM_LENGTH:
            raise ValidationException(
                "claim",
                f"Claim cannot exceed {VERIFICATION_CONFIG.MAX_CLAIM_LENGTH} characters"
            )

        return claim
