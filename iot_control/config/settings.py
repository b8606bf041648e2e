import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Application settings
APP_NAME = "IoT Control Service"
APP_VERSION = os.getenv("API_VERSION", "0.1.0")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# API settings
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# Firebase settings
FIREBASE_AUTH_URL = os.getenv("FIREBASE_AUTH_URL", "https://identitytoolkit.googleapis.com/v1")

# Auth settings
AUTH_REQUEST_TIMEOUT = int(os.getenv("AUTH_REQUEST_TIMEOUT", "10"))  # seconds
SESSION_TTL = int(os.getenv("SESSION_TTL", "3600"))  # ID token lifetime
MIN_PASSWORD_LENGTH = 6
