import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-change-in-production'

    # REST backend the marketplace front end talks to
    BACKEND_API_URL = os.getenv("BACKEND_API_URL", "http://localhost:5000/api")
    BACKEND_TIMEOUT = int(os.getenv("BACKEND_TIMEOUT", 15))  # seconds
    BACKEND_MAX_RETRIES = int(os.getenv("BACKEND_MAX_RETRIES", 3))

    # Built-in example tours listed next to agency packages
    SHOWCASE_TOURS_ENABLED = os.getenv("SHOWCASE_TOURS_ENABLED", "true").lower() == "true"

    # Session cookie
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    # Frontend URL allowed by CORS
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
