"""
Centralized strings file for ChatMaster Bot.
All user-facing strings in Uzbek, Russian and English.

To update translations, simply edit the strings in this file. Every entry
must define all supported languages; coverage is checked at startup by
localization.validate_localization().
"""

from typing import Final

from errors import ErrorKind


# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

SYSTEM_MESSAGES: Final[dict[str, str]] = {
    "uz": "Siz aqlli yordamchisiz, foydalanuvchining savoliga javob bering.",
    "ru": "Вы умный помощник. Отвечайте на вопросы пользователя подробно и полезно.",
    "en": "You are a smart assistant. Answer the user's questions in detail and helpfully.",
}


# =============================================================================
# ERROR MESSAGES (ErrorKind -> language -> text)
# =============================================================================

ERROR_MESSAGES: Final[dict[ErrorKind, dict[str, str]]] = {
    ErrorKind.API: {
        "uz": "❌ Javobni olishda xatolik",
        "ru": "❌ Ошибка при получении ответа",
        "en": "❌ Error getting response",
    },
    ErrorKind.CONNECTION: {
        "uz": "❌ Ulanish xatosi",
        "ru": "❌ Ошибка соединения",
        "en": "❌ Connection error",
    },
    ErrorKind.OCR: {
        "uz": "❌ Rasmdan matn o'qib bo'lmadi",
        "ru": "❌ Не удалось прочитать текст с изображения",
        "en": "❌ Could not read text from image",
    },
    ErrorKind.NO_TEXT: {
        "uz": "❌ Rasmdan matn topilmadi",
        "ru": "❌ На изображении не найден текст",
        "en": "❌ No text found in image",
    },
    ErrorKind.VOICE: {
        "uz": "❌ Men faqat matn bilan javob bera olaman",
        "ru": "❌ Я могу отвечать только текстом",
        "en": "❌ I can only reply in text",
    },
}


# =============================================================================
# IMAGE PROMPT (label + instruction wrapped around OCR text)
# =============================================================================

IMAGE_TEXT_LABELS: Final[dict[str, str]] = {
    "uz": "Rasmdan olingan matn",
    "ru": "Текст с изображения",
    "en": "Text from image",
}

IMAGE_TEXT_INSTRUCTIONS: Final[dict[str, str]] = {
    "uz": "Bu matn haqida javob bering yoki tahlil qiling.",
    "ru": "Ответьте на вопросы по этому тексту или проанализируйте его.",
    "en": "Answer questions about this text or analyze it.",
}


# =============================================================================
# START COMMAND
# =============================================================================

_CHOOSE_LANGUAGE: Final[str] = (
    "Iltimos tilni tanlang / Please choose your language / Пожалуйста, выберите язык:"
)

START_GREETINGS: Final[dict[str, str]] = {
    "uz": f"👋 Salom! Men ChatMaster AI 🤖\n\n{_CHOOSE_LANGUAGE}",
    "ru": f"👋 Привет! Я ChatMaster AI 🤖\n\n{_CHOOSE_LANGUAGE}",
    "en": f"👋 Hello! I am ChatMaster AI 🤖\n\n{_CHOOSE_LANGUAGE}",
}


# =============================================================================
# LANGUAGE SELECTION
# =============================================================================

WELCOME_MESSAGES: Final[dict[str, str]] = {
    "uz": (
        "Men ChatMaster AI — sizning aqlli yordamchingizman. Savollarga javob "
        "beraman, rasmlarni tahlil qilaman va o'qishga yordam beraman!"
    ),
    "ru": (
        "Я ChatMaster AI — ваш умный помощник. Отвечаю на вопросы, анализирую "
        "изображения и помогаю с обучением!"
    ),
    "en": (
        "I am ChatMaster AI — your smart assistant. I answer questions, analyze "
        "images, and help with learning!"
    ),
}


# =============================================================================
# BUTTON LABELS
# =============================================================================

BTN_LANGUAGES: Final[dict[str, str]] = {
    "uz": "🇺🇿 Uzbek",
    "ru": "🇷🇺 Русский",
    "en": "🇬🇧 English",
}
