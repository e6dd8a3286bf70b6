from io import BytesIO

import pytest
from PIL import Image

from image_insight import create_app
from image_insight.config.config import Config
from image_insight.models import CompressionOptions
from image_insight.services.notification_service import NotificationCenter
from image_insight.services.ui_state import UIState
from image_insight.services.upload_pipeline import UploadPipeline
from image_insight.utils.image_utils import PreviewStore


class FakeGenerativeClient:
    """Stands in for the Gemini client; records every call."""

    def __init__(self, text="A scenic photo.", error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def analyze(self, prompt, image):
        self.calls.append((prompt, image))
        if self.error is not None:
            raise self.error
        return self.text


def _make_image(size=(64, 48), image_format="JPEG", color=(200, 120, 40)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=image_format)
    return buffer.getvalue()


def _make_noise_image(size=(4000, 3000), quality=95) -> bytes:
    # Gaussian noise compresses badly, so the JPEG ends up well over 1 MB
    bands = [Image.effect_noise(size, 64) for _ in range(3)]
    buffer = BytesIO()
    Image.merge("RGB", bands).save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    return _make_image


@pytest.fixture(scope="session")
def large_jpeg() -> bytes:
    return _make_noise_image()


@pytest.fixture
def fake_client():
    return FakeGenerativeClient()


@pytest.fixture
def pipeline(fake_client):
    return UploadPipeline(
        client=fake_client,
        state=UIState(),
        notifier=NotificationCenter(),
        previews=PreviewStore(),
        options=CompressionOptions(max_size_mb=1, max_dimension_px=1920),
    )


@pytest.fixture
def app(fake_client):
    app = create_app(Config(gemini_api_key="test-key", log_level="DEBUG"), client=fake_client)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
