"""Long-polling entry point for the ChatMaster bot."""

import sys

from telegram import Update

from config import logger, validate_config, TELEGRAM_TOKEN
from application import build_application


def main() -> None:
    if not validate_config():
        logger.critical("Configuration validation failed, not starting the bot")
        sys.exit(1)

    application = build_application(TELEGRAM_TOKEN)
    logger.info("ChatMaster AI bot started")
    logger.info("Bot is ready to receive messages...")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
