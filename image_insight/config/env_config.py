import os
from dotenv import load_dotenv

load_dotenv()

# Missing credentials surface as AuthError on the first model call
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL")
UI_URL = os.getenv("UI_URL", "http://localhost:4200")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
