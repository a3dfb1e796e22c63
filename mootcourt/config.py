"""
config.py

Loads environment variables and defines constants
for the webhook endpoints and global UI settings.
"""

import os
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

# Webhook base URL (n8n workflow). Trailing slash is trimmed so paths join cleanly.
MOOT_BASE_URL = (os.getenv("MOOT_BASE_URL") or "https://YOUR_N8N_URL/webhook").strip().rstrip("/")

REQUEST_TIMEOUT_SECONDS = 60

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Setup screen defaults
DEFAULT_CASE_ID = "case_001"
DEFAULT_ROLE = "petitioner"
DEFAULT_JUDGE_STYLE = "neutral"
