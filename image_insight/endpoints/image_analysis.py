import structlog
from flask import Blueprint, abort, current_app, jsonify, make_response, render_template, request

from ..config.constants import DEFAULT_PROMPT
from ..models import SelectedImage
from ..services.upload_pipeline import UploadPipeline
from ..utils.image_utils import guess_mime_type

logger = structlog.get_logger()
image_analysis_bp = Blueprint('image_analysis', __name__)


def _pipeline() -> UploadPipeline:
    return current_app.extensions['upload_pipeline']


def _state_response(status: int = 200):
    pipeline = _pipeline()
    body = {
        'response': pipeline.state.snapshot().to_dict(),
        'notifications': [n.to_dict() for n in pipeline.notifier.drain()],
    }
    return jsonify(body), status


@image_analysis_bp.route('/', methods=['GET'])
def index():
    return render_template('index.html', state=_pipeline().state.snapshot(), default_prompt=DEFAULT_PROMPT)


@image_analysis_bp.route('/hello-world', methods=['GET'])
def hello_world():
    return jsonify("Hello world!")


@image_analysis_bp.route('/state', methods=['GET'])
def get_state():
    return _state_response()


@image_analysis_bp.route('/select-image', methods=['POST'])
def select_image():
    try:
        file = request.files.get('image')
        if not file or not file.filename:
            return jsonify({'error': 'No image file provided'}), 400

        mime_type = file.mimetype
        if not mime_type or mime_type == 'application/octet-stream':
            mime_type = guess_mime_type(file.filename)

        image = SelectedImage(content=file.read(), mime_type=mime_type, filename=file.filename)
        _pipeline().select_image(image)
        return _state_response()
    except Exception as e:
        logger.exception("Error selecting image:\n")
        return jsonify({'error': str(e)}), 500


@image_analysis_bp.route('/prompt', methods=['POST'])
def set_prompt():
    prompt = request.form.get('prompt')
    if prompt is None:
        return jsonify({'error': 'No prompt provided'}), 400
    _pipeline().set_prompt(prompt)
    return _state_response()


@image_analysis_bp.route('/analyze', methods=['POST'])
async def analyze():
    try:
        await _pipeline().analyze(request.form.get('prompt'))
        return _state_response()
    except Exception as e:
        logger.exception("Error analyzing image:\n")
        return jsonify({'error': str(e)}), 500


@image_analysis_bp.route('/close-modal', methods=['POST'])
def close_modal():
    _pipeline().dismiss_modal()
    return _state_response()


@image_analysis_bp.route('/previews/<token>')
def preview(token):
    stored = _pipeline().previews.get(token)
    if stored is None:
        abort(404)
    content, mime_type = stored
    response = make_response(content)
    response.headers["Content-Type"] = mime_type
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"
    return response
