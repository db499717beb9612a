"""Exceptions raised by the AI and advice services."""


class AIServiceError(Exception):
    """The AI capability could not produce a usable answer."""


class AIResponseError(AIServiceError):
    """The AI answered, but the text holds no decodable JSON object."""

    def __init__(self, message: str, raw_text: str | None = None):
        super().__init__(message)
        self.raw_text = raw_text


class AdviceUnavailableError(Exception):
    """Advice for a category could not be generated and has no safe default."""

    def __init__(self, category: str, reason: str):
        super().__init__(f"{category} advice unavailable: {reason}")
        self.category = category
        self.reason = reason
