"""Validation of incoming creative briefs."""

import logging

from pydantic import ValidationError

from .models import CreativeBrief

logger = logging.getLogger(__name__)

INVALID_BRIEF_MESSAGE = "Invalid creative brief supplied."


class BriefValidationError(Exception):
    """Raised when a request body is not a valid creative brief.

    The message is generic and safe to return to the browser; field-level
    detail stays in the server log.
    """

    def __init__(self, message: str = INVALID_BRIEF_MESSAGE):
        super().__init__(message)
        self.message = message


def validate_brief(payload: object) -> CreativeBrief:
    """Validate a decoded JSON body as a :class:`CreativeBrief`.

    Args:
        payload: Decoded JSON value.  ``None`` (an unreadable body) and
            non-object values are rejected like any other invalid brief.

    Returns:
        The validated, frozen brief.

    Raises:
        BriefValidationError: If any field is missing, of the wrong type, or
            out of bounds.
    """
    if not isinstance(payload, dict):
        logger.info("Rejected brief: body is %s, not an object", type(payload).__name__)
        raise BriefValidationError()

    try:
        return CreativeBrief.model_validate(payload)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        logger.info("Rejected brief: invalid fields %s", fields)
        raise BriefValidationError() from e
