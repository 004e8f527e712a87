"""Configuration for the AI text provider, read from the environment."""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Endpoint
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
GEMINI_API_URL = os.getenv(
    "GEMINI_API_URL",
    f"https://generativelanguage.googleapis.com/v1beta/models/{GEMINI_MODEL}:generateContent",
)

# Request Configuration
REQUEST_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "60"))

# Generation Configuration
TEMPERATURE = 0.7
TOP_K = 40
TOP_P = 0.95
MAX_OUTPUT_TOKENS = 2048
