from typing import Optional


# Base class for everything the generation pipeline raises.
# `category` is the only part that may be shown to end users.
class GenerationError(RuntimeError):
    category = "generation_failed"


# Primary and fallback model both failed to return usable text
class InvocationFailure(GenerationError):
    category = "upstream_unavailable"

    def __init__(self, message: str, model: Optional[str] = None):
        super().__init__(message)
        self.model = model


# Text came back but could not be repaired into valid JSON
class DecodeFailure(GenerationError, ValueError):
    category = "malformed_response"

    def __init__(self, message: str, preview: str = ""):
        super().__init__(message)
        self.preview = preview


# Overall request budget elapsed
class TimeoutFailure(GenerationError):
    category = "timeout"


# A required stage failed; the original failure is kept as __cause__
class StageFailure(GenerationError):

    def __init__(self, stage: str, cause: GenerationError):
        super().__init__(f"Stage '{stage}' failed: {cause.category}")
        self.stage = stage
        self.category = cause.category


# Stage failures keep the type of their cause, so `except InvocationFailure`
# and `except DecodeFailure` still see them
class InvocationStageFailure(StageFailure, InvocationFailure):

    def __init__(self, stage: str, cause: InvocationFailure):
        super().__init__(stage, cause)
        self.model = cause.model


class DecodeStageFailure(StageFailure, DecodeFailure):

    def __init__(self, stage: str, cause: DecodeFailure):
        super().__init__(stage, cause)
        self.preview = cause.preview


def stage_failure(stage: str, cause: GenerationError) -> StageFailure:
    if isinstance(cause, InvocationFailure):
        return InvocationStageFailure(stage, cause)
    if isinstance(cause, DecodeFailure):
        return DecodeStageFailure(stage, cause)
    return StageFailure(stage, cause)


GENERIC_FAILURE_MESSAGE = "Failed to generate study guide. Please try again."


def public_message(exc: BaseException) -> str:
    """Message safe to show an end user. Upstream error text never passes through."""
    return GENERIC_FAILURE_MESSAGE
