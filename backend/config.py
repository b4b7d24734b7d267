import os
from datetime import datetime
from dotenv import load_dotenv

load_dotenv()

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-5")
ANTHROPIC_MAX_TOKENS = int(os.getenv("ANTHROPIC_MAX_TOKENS", 1024))
ANTHROPIC_TEMPERATURE = float(os.getenv("ANTHROPIC_TEMPERATURE", 0.1))
ANTHROPIC_TIMEOUT = float(os.getenv("ANTHROPIC_TIMEOUT", 30))

# Display name goes into the prompt; all arithmetic uses the fixed offset below
TIMEZONE_NAME = os.getenv("TASK_TIMEZONE", "Asia/Kolkata")
UTC_OFFSET = os.getenv("TASK_UTC_OFFSET", "+05:30")
TIMEZONE = datetime.strptime(UTC_OFFSET, "%z").tzinfo

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
