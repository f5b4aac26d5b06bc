"""Configuration module for the ChatMaster bot."""

import os
import logging
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Logging Setup ---
LOG_DIR = os.environ.get("CHATMASTER_LOG_PATH", "logs")
os.makedirs(LOG_DIR, exist_ok=True)

# Log rotation settings
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB per file
LOG_BACKUP_COUNT = 5  # Keep 5 backup files (total ~60 MB max)

# Set up logging with UTC timestamps
formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
formatter.converter = lambda *args: datetime.now(timezone.utc).timetuple()

# Set up rotating file handler (auto-rotates when file reaches 10MB)
file_handler = RotatingFileHandler(
    os.path.join(LOG_DIR, "bot.log"),
    maxBytes=LOG_MAX_BYTES,
    backupCount=LOG_BACKUP_COUNT,
)
file_handler.setFormatter(formatter)

# Set up console handler
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)

# Configure logging
logging.basicConfig(level=logging.INFO, handlers=[file_handler, console_handler])
logger = logging.getLogger(__name__)

# httpx logs every request URL at INFO, and Telegram file URLs embed the token
logging.getLogger("httpx").setLevel(logging.WARNING)

# --- Configuration ---
# Make sure to set these environment variables before running the bot
TELEGRAM_TOKEN = os.environ.get("TELEGRAM_TOKEN")
OPENROUTER_KEY = os.environ.get("OPENROUTER_KEY")

# Completion provider settings
OPENROUTER_URL = os.environ.get(
    "OPENROUTER_URL", "https://openrouter.ai/api/v1/chat/completions"
)
OPENROUTER_MODEL = os.environ.get("OPENROUTER_MODEL", "openai/gpt-3.5-turbo")
# OpenRouter asks clients to identify themselves with these two headers
OPENROUTER_REFERER = os.environ.get(
    "OPENROUTER_REFERER", "https://github.com/chatmaster-ai/chatmaster-bot"
)
OPENROUTER_TITLE = os.environ.get("OPENROUTER_TITLE", "ChatMaster AI Bot")

# Tesseract language specifier, independent of the user's interface language
OCR_LANGUAGES = os.environ.get("OCR_LANGUAGES", "eng+rus")

# Directory for transient downloaded images
SCRATCH_DIR = os.environ.get(
    "CHATMASTER_SCRATCH_PATH", os.path.join(tempfile.gettempdir(), "chatmaster")
)

# Webhook settings
WEBHOOK_URL = os.environ.get("WEBHOOK_URL")
WEBHOOK_SECRET = os.environ.get("WEBHOOK_SECRET")  # Secret token for webhook validation
PORT = int(os.environ.get("PORT", 8080))

USER_AGENT = "TelegramBot/1.0"


def validate_config(is_webhook: bool = False, check_localization: bool = True):
    """Validate that required environment variables and strings are set.

    Args:
        is_webhook: If True, also validates webhook-specific config
        check_localization: If True, validates that every localized string exists
    """
    if not TELEGRAM_TOKEN:
        logger.error("Error: TELEGRAM_TOKEN environment variable not set.")
        return False
    if not OPENROUTER_KEY:
        logger.error("Error: OPENROUTER_KEY environment variable not set.")
        return False
    if is_webhook and not WEBHOOK_SECRET:
        logger.error(
            "Error: WEBHOOK_SECRET environment variable not set for webhook mode."
        )
        return False

    if check_localization:
        # Imported here: localization pulls in strings/errors, which never need config
        from localization import validate_localization

        localization_valid, missing = validate_localization()
        if not localization_valid:
            logger.error(f"Error: Missing localized strings: {', '.join(missing)}")
            return False

    return True
