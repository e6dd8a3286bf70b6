MODEL_NAME = "gemini-2.0-flash"

DEFAULT_PROMPT = "Explain this image in around 50 words"

# Compression budget applied before an image is sent to the model
MAX_SIZE_MB = 1
MAX_DIMENSION_PX = 1920
MAX_UPLOAD_MB = 20

# User-facing notifications
NO_IMAGE_MESSAGE = "Please select an image!"
DEFAULT_PROMPT_NOTICE = "Generating text about the picture in 50 words..."
UPLOAD_ERROR_MESSAGE = "Error uploading image. Please try again."
ANALYZE_ERROR_MESSAGE = "Error analyzing image. Please try again."
ANALYSIS_IN_PROGRESS_MESSAGE = "An analysis is already in progress."

PREVIEW_ROUTE = "/previews"

MIME_TYPES = {
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
    'webp': 'image/webp',
    'gif': 'image/gif',
    'bmp': 'image/bmp',
}
