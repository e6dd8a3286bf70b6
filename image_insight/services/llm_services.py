import httpx
import structlog
from google import genai
from google.genai import errors, types

from ..config.config import Config
from ..errors import AuthError, NetworkError, UpstreamError
from ..models import EncodedPayload

logger = structlog.get_logger()

AUTH_STATUS_CODES = (401, 403)


def _is_auth_rejection(error: errors.APIError) -> bool:
    # Gemini answers an invalid key with 400 INVALID_ARGUMENT rather than 401
    message = str(error.message or error)
    return error.code in AUTH_STATUS_CODES or "API key" in message or "API_KEY" in message


class GenerativeClient:
    """
    Sends one prompt plus one inline image to a Gemini model and returns the generated text.

    The credential is taken from `config` once; the SDK client itself is created on the first
    call so a missing key is reported as `AuthError` when an analysis runs, not at startup.
    """

    def __init__(self, config: Config, sdk_client: genai.Client | None = None):
        self._api_key = config.gemini_api_key
        self.model_name = config.model_name
        self._client = sdk_client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise AuthError("GEMINI_API_KEY is not set")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def analyze(self, prompt: str, image: EncodedPayload) -> str:
        """
        Generates a description of `image` following `prompt`.
        Args:
            prompt (str): Effective prompt.
            image (EncodedPayload): Base64 image and its MIME type.
        Returns:
            text (str): Generated description.
        Raises:
            AuthError: Missing or rejected credential.
            NetworkError: Transport failure.
            UpstreamError: Service-side rejection or a response without text.
        """
        client = self._get_client()
        image_part = types.Part.from_bytes(data=image.to_bytes(), mime_type=image.mime_type)
        logger.debug("Sending image to model", model=self.model_name, mime_type=image.mime_type, encoded_chars=len(image.data))

        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=[prompt, image_part],
            )
        except errors.APIError as e:
            if _is_auth_rejection(e):
                raise AuthError(str(e.message or e)) from e
            raise UpstreamError(str(e.message or e)) from e
        except (httpx.TransportError, OSError) as e:
            raise NetworkError(str(e) or e.__class__.__name__) from e

        text = getattr(response, "text", None)
        if not text:
            raise UpstreamError("The model returned an empty response")
        logger.debug("Model response received", model=self.model_name, chars=len(text))
        return text
