import threading
import uuid

from ..config.constants import MIME_TYPES, PREVIEW_ROUTE


class PreviewStore:
    """
    Keeps display-only copies of images in memory and hands out URLs for them.
    """

    def __init__(self, route: str = PREVIEW_ROUTE):
        self.route = route.rstrip("/")
        self._previews: dict[str, tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def publish(self, content: bytes, mime_type: str) -> str:
        token = uuid.uuid4().hex
        with self._lock:
            self._previews[token] = (content, mime_type)
        return f"{self.route}/{token}"

    def get(self, token: str) -> tuple[bytes, str] | None:
        with self._lock:
            return self._previews.get(token)

    def revoke(self, url: str | None):
        if not url:
            return
        token = url.rsplit("/", 1)[-1]
        with self._lock:
            self._previews.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._previews)


def guess_mime_type(filename: str | None, fallback: str = 'application/octet-stream') -> str:
    """
    Arguments:
        filename (str): Uploaded file name.
        fallback (str): Returned when the extension is unknown.
    Returns:
        mime_type (str): Image MIME type inferred from the extension.
    """
    if not filename or "." not in filename:
        return fallback
    return MIME_TYPES.get(filename.rsplit(".", 1)[-1].lower(), fallback)
