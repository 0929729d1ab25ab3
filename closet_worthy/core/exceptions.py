"""
Exceptions raised by the AI gateway
Routes map these onto HTTP status codes
"""


class AIServiceError(Exception):
    """
    Base exception for any failure while talking to the language model
    """
    def __init__(self, message: str = "AI request failed"):
        self.message = message
        super().__init__(self.message)


class AIServiceNotConfiguredError(AIServiceError):
    """
    Exception raised when no Anthropic API key is configured
    """
    def __init__(self, message: str = "Anthropic API key not configured"):
        super().__init__(message)


class AIUpstreamError(AIServiceError):
    """
    Exception raised when the upstream call fails (network error or non-2xx status)
    """
    def __init__(self, message: str = "Upstream AI call failed", status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class AIResponseParseError(AIServiceError):
    """
    Exception raised when a model reply is not the JSON shape we asked for
    """
    def __init__(self, message: str = "Failed to parse AI response", raw_text: str | None = None):
        self.raw_text = raw_text
        super().__init__(message)
