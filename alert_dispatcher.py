# Filename: alert_dispatcher.py

import logging

from models import Verdict
from telegram_alert import NotificationError
from token_ledger import TokenLedger

logger = logging.getLogger("AlertDispatcher")


class AlertDispatcher:
    """
    Delivers passing verdicts and records the token in the ledger once
    delivery is confirmed. A failed delivery leaves the ledger untouched so a
    later cycle can alert the same token again.
    """

    def __init__(self, notifier, ledger: TokenLedger):
        self.notifier = notifier
        self.ledger = ledger

    def dispatch(self, verdict: Verdict) -> bool:
        if not verdict.passed or not verdict.report:
            logger.warning(f"[ALERT] Refusing to dispatch non-passing verdict for {verdict.token}")
            return False

        try:
            self.notifier.send_message(verdict.report)
        except NotificationError as e:
            logger.error(f"[ALERT] Error sending alert for {verdict.token}: {e}")
            return False

        self.ledger.mark_alerted(verdict.token)
        logger.info(f"[ALERT] Alert sent for {verdict.token}")
        return True
