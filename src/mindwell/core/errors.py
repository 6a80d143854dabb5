"""Domain error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations


class MindWellError(RuntimeError):
    """Base class for errors raised by MindWell services.

    Each subclass carries the HTTP status the API layer translates it to.
    """

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or ""


class ValidationError(MindWellError):
    """Missing or malformed input."""

    status_code = 400


class NotFoundError(MindWellError):
    """The referenced resource does not exist."""

    status_code = 404


class ForbiddenError(MindWellError):
    """The requester is not allowed to act on the resource."""

    status_code = 403


class UpstreamUnavailable(MindWellError):
    """An external collaborator is unreachable or not configured."""

    status_code = 503


class UpstreamError(MindWellError):
    """An external collaborator failed while handling the request."""

    status_code = 500


class ModerationBlocked(MindWellError):
    """Submitted content was rejected by moderation."""

    status_code = 400


class AssistantBlocked(UpstreamError):
    """The generative service refused to answer for safety reasons."""

    def __init__(self, block_reason: str) -> None:
        super().__init__(
            f"My response was blocked due to safety settings ({block_reason}). "
            "Please rephrase your message or contact support if you believe this is an error."
        )
        self.block_reason = block_reason
