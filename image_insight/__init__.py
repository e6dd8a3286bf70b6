from flask import Flask
from flask_cors import CORS

from .config.config import Config
from .endpoints.image_analysis import image_analysis_bp
from .models import CompressionOptions
from .services.llm_services import GenerativeClient
from .services.notification_service import NotificationCenter
from .services.ui_state import UIState
from .services.upload_pipeline import UploadPipeline
from .utils.image_utils import PreviewStore
from .utils.logging_utils import configure_logging


def create_app(config: Config | None = None, client: GenerativeClient | None = None):
    config = config or Config.from_env()
    configure_logging(config.log_level)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_mb * 1024 * 1024
    CORS(app, resources={r"/*": {"origins": config.ui_url}})

    # One pipeline and one view state per application
    app.extensions['upload_pipeline'] = UploadPipeline(
        client=client or GenerativeClient(config),
        state=UIState(),
        notifier=NotificationCenter(),
        previews=PreviewStore(),
        options=CompressionOptions(max_size_mb=config.max_size_mb, max_dimension_px=config.max_dimension_px),
    )

    app.register_blueprint(image_analysis_bp)

    return app
