# Filename: telegram_alert.py

import requests
import logging
from typing import Optional

logger = logging.getLogger("TelegramNotifier")


class NotificationError(Exception):
    """The message could not be confirmed as delivered."""


class TelegramNotifier:
    def __init__(self, bot_token: str, chat_id: str,
                 session: Optional[requests.Session] = None, timeout: float = 15):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout
        self.session = session or requests.Session()

        if not self.bot_token or not self.chat_id:
            logger.error("[Telegram] Missing bot token or chat ID!")

    def send_message(self, text: str, parse_mode: Optional[str] = None) -> None:
        """
        Sends a message to the configured chat.
        Raises NotificationError unless Telegram confirms the delivery.
        """
        if not self.bot_token or not self.chat_id:
            raise NotificationError("Telegram bot token or chat ID not configured")

        url = f"https://api.telegram.org/bot{self.bot_token}/sendMessage"
        payload = {
            "chat_id": self.chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }
        if parse_mode:
            payload["parse_mode"] = parse_mode

        try:
            response = self.session.post(url, data=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationError(f"Request exception: {e}") from e

        if response.status_code != 200:
            raise NotificationError(f"Failed: {response.status_code} - {response.text}")

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not body.get("ok", False):
            raise NotificationError(f"Telegram refused the message: {body.get('description', response.text)}")

        logger.info("[Telegram] ✅ Message sent successfully.")
