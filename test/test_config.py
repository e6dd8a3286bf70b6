from image_insight.config import env_config
from image_insight.config.config import Config
from image_insight.config.constants import MAX_DIMENSION_PX, MODEL_NAME


def test_from_env_defaults(monkeypatch):
    monkeypatch.setattr(env_config, "GEMINI_API_KEY", None)
    monkeypatch.setattr(env_config, "GEMINI_MODEL", None)
    for name in ("MAX_IMAGE_SIZE_MB", "MAX_IMAGE_DIMENSION_PX", "MAX_UPLOAD_MB"):
        monkeypatch.delenv(name, raising=False)

    config = Config.from_env()

    assert config.gemini_api_key is None
    assert config.model_name == MODEL_NAME
    assert config.max_dimension_px == MAX_DIMENSION_PX


def test_from_env_overrides(monkeypatch):
    monkeypatch.setattr(env_config, "GEMINI_API_KEY", "AIzaSecretValue")
    monkeypatch.setattr(env_config, "GEMINI_MODEL", "gemini-custom")
    monkeypatch.setenv("MAX_IMAGE_SIZE_MB", "0.5")
    monkeypatch.setenv("MAX_IMAGE_DIMENSION_PX", "1024")

    config = Config.from_env()

    assert config.gemini_api_key == "AIzaSecretValue"
    assert config.model_name == "gemini-custom"
    assert config.max_size_mb == 0.5
    assert config.max_dimension_px == 1024
    assert "AIzaSecretValue" not in repr(config)
