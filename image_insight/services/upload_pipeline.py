import threading

import structlog

from ..config.constants import (
    ANALYSIS_IN_PROGRESS_MESSAGE,
    ANALYZE_ERROR_MESSAGE,
    DEFAULT_PROMPT,
    DEFAULT_PROMPT_NOTICE,
    NO_IMAGE_MESSAGE,
    UPLOAD_ERROR_MESSAGE,
)
from ..errors import AnalysisInProgressError, ImageInsightError, NoImageError
from ..models import AnalysisResult, CompressionOptions, SelectedImage
from ..utils.image_utils import PreviewStore
from .image_codec_service import encode
from .image_compression_service import compress
from .llm_services import GenerativeClient
from .notification_service import NotificationCenter
from .ui_state import UIState

logger = structlog.get_logger()


def resolve_prompt(prompt_override: str | None, current_prompt: str | None) -> tuple[str, bool]:
    """
    Picks the prompt actually sent with a request.
    Args:
        prompt_override (str): Prompt passed with the analyze action.
        current_prompt (str): Value of the prompt field.
    Returns:
        prompt, defaulted (tuple[str, bool]): Effective prompt and whether `DEFAULT_PROMPT` was substituted.
    """
    for candidate in (prompt_override, current_prompt):
        if candidate and candidate.strip():
            return candidate, False
    return DEFAULT_PROMPT, True


class UploadPipeline:
    """
    Runs an analysis: selected image -> compression -> base64 payload -> model -> view state.

    Every failure is turned into a single user notification; `busy` is always cleared once an
    analysis settles.
    """

    def __init__(
        self,
        client: GenerativeClient,
        state: UIState,
        notifier: NotificationCenter,
        previews: PreviewStore,
        options: CompressionOptions | None = None,
    ):
        self.client = client
        self.state = state
        self.notifier = notifier
        self.previews = previews
        self.options = options or CompressionOptions()
        self._selected: SelectedImage | None = None
        self._lock = threading.Lock()

    @property
    def selected_image(self) -> SelectedImage | None:
        with self._lock:
            return self._selected

    def select_image(self, image: SelectedImage):
        """
        Stores the image pending analysis and publishes its preview. No network activity.
        """
        if not image.content or not (image.mime_type or "").startswith("image/"):
            logger.warning("Rejected image selection", filename=image.filename, mime_type=image.mime_type, size=image.size)
            self.notifier.error(UPLOAD_ERROR_MESSAGE)
            return

        with self._lock:
            previous_preview = self.state.snapshot().preview_url
            self._selected = image
            self.state.set_preview_url(self.previews.publish(image.content, image.mime_type))
        self._release_preview(previous_preview)
        logger.info("Image selected", filename=image.filename, mime_type=image.mime_type, size=image.size)

    def set_prompt(self, prompt: str):
        self.state.set_prompt(prompt)

    def dismiss_modal(self):
        self.state.dismiss_modal()

    def _release_preview(self, url: str | None):
        # The modal may still be showing the preview of the last result
        snapshot = self.state.snapshot()
        in_use = {snapshot.preview_url, snapshot.result.preview_url if snapshot.result else None}
        if url and url not in in_use:
            self.previews.revoke(url)

    def _reject(self, error: ImageInsightError) -> None:
        logger.info("Analysis rejected", reason=type(error).__name__)
        self.notifier.error(str(error))
        return None

    async def analyze(self, prompt_override: str | None = None) -> AnalysisResult | None:
        """
        Analyzes the selected image.
        Args:
            prompt_override (str): Prompt to use instead of the prompt field, if not blank.
        Returns:
            result (AnalysisResult | None): The new result, or None if the analysis failed.
        """
        image = self.selected_image
        if image is None:
            return self._reject(NoImageError(NO_IMAGE_MESSAGE))

        prompt, defaulted = resolve_prompt(prompt_override, self.state.snapshot().prompt)
        if not self.state.begin_analysis():
            return self._reject(AnalysisInProgressError(ANALYSIS_IN_PROGRESS_MESSAGE))
        if defaulted:
            self.notifier.info(DEFAULT_PROMPT_NOTICE)

        result = None
        try:
            result = await self._run(image, prompt)
        except ImageInsightError as e:
            logger.exception("Image analysis failed", error_type=type(e).__name__)
            self.notifier.error(str(e))
        except Exception:
            logger.exception("Unexpected error while analyzing image")
            self.notifier.error(ANALYZE_ERROR_MESSAGE)
        finally:
            if result is None:
                self.state.fail_analysis()
        return result

    async def _run(self, image: SelectedImage, prompt: str) -> AnalysisResult:
        compressed = await compress(image.content, self.options, image.mime_type)
        payload = await encode(compressed.content, compressed.mime_type)
        text = await self.client.analyze(prompt, payload)

        result = AnalysisResult(
            text=text,
            preview_url=self.previews.publish(compressed.content, compressed.mime_type),
            prompt=prompt,
        )
        previous = self.state.complete_analysis(result)
        if previous is not None:
            self._release_preview(previous.preview_url)
        logger.info("Image analyzed", filename=image.filename, compressed_size=compressed.size, chars=len(text))
        return result
