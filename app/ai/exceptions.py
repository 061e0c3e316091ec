class ProviderError(RuntimeError):
    """Raised when the upstream text service fails at the transport level."""

    def __init__(self, message: str, *, model: str = "", status_code: int | None = None):
        super().__init__(message)
        self.model = model
        self.status_code = status_code


class AnalysisParseError(ValueError):
    """Raised when a generated response holds no usable JSON object."""
