import base64
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SelectedImage:
    content: bytes = field(repr=False)
    mime_type: str
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class CompressedImage:
    content: bytes = field(repr=False)
    mime_type: str
    width: int
    height: int

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class CompressionOptions:
    max_size_mb: float = 1.0
    max_dimension_px: int = 1920

    @property
    def max_size_bytes(self) -> int:
        return int(self.max_size_mb * 1024 * 1024)


@dataclass(frozen=True)
class EncodedPayload:
    """Base64 image data plus its MIME type, ready to be sent inline."""
    data: str = field(repr=False)
    mime_type: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data, validate=True)


@dataclass(frozen=True)
class AnalysisResult:
    text: str
    preview_url: str | None = None
    prompt: str = ""


@dataclass(frozen=True)
class UIStateSnapshot:
    busy: bool = False
    modal_open: bool = False
    prompt: str = ""
    preview_url: str | None = None
    result: AnalysisResult | None = None

    def to_dict(self) -> dict:
        return {
            "busy": self.busy,
            "modalOpen": self.modal_open,
            "prompt": self.prompt,
            "previewUrl": self.preview_url,
            "result": None if self.result is None else {
                "text": self.result.text,
                "previewUrl": self.result.preview_url,
                "prompt": self.result.prompt,
            },
        }
