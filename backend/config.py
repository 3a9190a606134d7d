"""Application configuration via environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()

# Positioning
PASS_BUDGET = int(os.getenv("PASS_BUDGET", "20"))
BOUNDS_PADDING = float(os.getenv("BOUNDS_PADDING", "0.1"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
