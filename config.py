"""
Global configuration settings and paths, read from the environment / .env.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Storage
STORE_BACKEND = os.getenv("STORE_BACKEND", "file")  # file | memory | sqlite | http
DATA_DIR = os.getenv("DATA_DIR", "data")
DB_PATH = os.getenv("DB_PATH", os.path.join(DATA_DIR, "clients.db"))

# HTTP backend
API_URL = os.getenv("API_URL", "http://localhost:3001/api/clients")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

# Autosave debounce, seconds
AUTOSAVE_DELAY = float(os.getenv("AUTOSAVE_DELAY", "0.8"))

# Server
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3001"))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(16 * 1024 * 1024)))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None
