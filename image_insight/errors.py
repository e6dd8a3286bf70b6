class ImageInsightError(Exception):
    """Base class for every failure the analysis pipeline reports to the user."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NoImageError(ImageInsightError):
    """Analysis was requested before any image was selected."""


class AnalysisInProgressError(ImageInsightError):
    """Another analysis is still running."""


class ReadError(ImageInsightError):
    """The selected image could not be read."""


class CompressionError(ImageInsightError):
    """The image data is malformed, unsupported or cannot meet the size budget."""


class AuthError(ImageInsightError):
    """The model endpoint rejected or never received a credential."""


class NetworkError(ImageInsightError):
    """The request never reached the model endpoint or its response was lost."""


class UpstreamError(ImageInsightError):
    """The model endpoint refused the request or returned an unusable response."""
