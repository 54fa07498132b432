# Filename: listing_sentinel.py

import sys
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from loguru import logger as filter_logger

from alert_dispatcher import AlertDispatcher
from config import ConfigError, load_config, validate_config
from content_analyzer import ContentAnalyzer
from filters import ListingFilter
from listing_discovery import ListingDiscovery
from listing_monitor import ListingMonitor
from market_data import DexScreenerClient
from scheduler import CycleScheduler
from social_analyzer import SocialAnalyzer
from social_client import SocialSearchClient
from telegram_alert import TelegramNotifier
from token_ledger import TokenLedger

logger = logging.getLogger("Main")

LOGURU_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "INFO", sink=sys.stderr):
    level = str(level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # The filter module logs through loguru, which keeps its own sink
    filter_logger.remove()
    filter_logger.add(
        sink,
        level=level if level in LOGURU_LEVELS else "INFO",
        format="{time:YYYY-MM-DD HH:mm:ss,SSS} - {level} - {message}",
    )


def build_monitor(config: Dict[str, Any], ledger: Optional[TokenLedger] = None) -> ListingMonitor:
    ledger = ledger if ledger is not None else TokenLedger()
    social_client = SocialSearchClient(config["TWITTER_BEARER_TOKEN"])
    notifier = TelegramNotifier(
        config["TELEGRAM_BOT_TOKEN"],
        config["TELEGRAM_CHAT_ID"],
        timeout=config["REQUEST_TIMEOUT_SECONDS"],
    )

    return ListingMonitor(
        discovery=ListingDiscovery(social_client, ledger, config),
        market=DexScreenerClient(config),
        social=SocialAnalyzer(social_client, config),
        content=ContentAnalyzer(config),
        listing_filter=ListingFilter(config),
        dispatcher=AlertDispatcher(notifier, ledger),
    )


def main():
    load_dotenv()
    config = load_config()
    setup_logging(config.get("LOG_LEVEL", "INFO"))

    try:
        validate_config(config)
    except ConfigError as e:
        logger.critical(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    logger.info(f"🚀 Starting listing sentinel for @{config['LISTING_ACCOUNT']}...")
    monitor = build_monitor(config)
    scheduler = CycleScheduler(
        run_cycle=monitor.run_cycle,
        interval_seconds=config["CYCLE_INTERVAL_SECONDS"],
        allow_overlap=config["ALLOW_OVERLAPPING_CYCLES"],
    )

    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        logger.info("❌ Sentinel stopped by user.")


if __name__ == "__main__":
    main()
