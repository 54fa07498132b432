# Filename: filters.py

import threading
from typing import Any, Dict, List, Optional

from loguru import logger

from alert_report import format_listing_alert
from models import (
    ContentSignals,
    Listing,
    MarketSnapshot,
    Sentiment,
    SocialSnapshot,
    TeamMention,
    UseCaseDepth,
    Verdict,
)

FILTER_CHECKS = (
    "liquidity",
    "volume",
    "fdv",
    "influencers",
    "mentions",
    "sentiment",
    "team",
    "use_case",
)


class ListingFilter:
    """
    Pass/fail decision for one listing. Every check must hold; none is weighted.
    """

    def __init__(self, config: Dict[str, Any]):
        self.min_liquidity = config["MIN_LIQUIDITY_USD"]
        self.min_volume = config["MIN_VOLUME_USD"]
        self.min_fdv = config["MIN_FDV_USD"]
        self.min_influencers = config["MIN_INFLUENCERS"]
        self.min_mentions = config["MIN_MENTIONS"]
        self.influencer_threshold = config["INFLUENCER_FOLLOWER_THRESHOLD"]
        self.filter_stats = {check: 0 for check in FILTER_CHECKS}
        self.filter_stats["no_data"] = 0
        self._stats_lock = threading.Lock()

    def evaluate(self, listing: Listing, market: Optional[MarketSnapshot],
                 social: Optional[SocialSnapshot], content: ContentSignals) -> Verdict:
        if market is None or social is None:
            self._count_rejections(("no_data",))
            missing = "market" if market is None else "social"
            logger.warning(f"[FILTER ❌] {listing.token}: no {missing} data.")
            return Verdict(token=listing.token, passed=False, failed_checks=("no_data",))

        failed = self.failed_checks(market, social, content)
        if failed:
            self._count_rejections(failed)
            logger.info(f"[FILTER ❌] {listing.token} didn't pass filters: {', '.join(failed)}")
            return Verdict(token=listing.token, passed=False, failed_checks=tuple(failed))

        logger.info(f"[FILTER ✅] {listing.token} passed all filters.")
        report = format_listing_alert(listing, market, social, content, self.influencer_threshold)
        return Verdict(token=listing.token, passed=True, report=report)

    def failed_checks(self, market: MarketSnapshot, social: SocialSnapshot,
                      content: ContentSignals) -> List[str]:
        checks = {
            "liquidity": market.liquidity_usd >= self.min_liquidity,
            "volume": market.volume_24h >= self.min_volume,
            "fdv": market.fdv >= self.min_fdv,
            "influencers": social.influencer_count >= self.min_influencers,
            "mentions": social.mention_count >= self.min_mentions,
            "sentiment": social.sentiment == Sentiment.POSITIVE,
            "team": content.team != TeamMention.NOT_FOUND,
            "use_case": content.use_case != UseCaseDepth.VAGUE,
        }
        return [name for name in FILTER_CHECKS if not checks[name]]

    def _count_rejections(self, checks):
        with self._stats_lock:
            for check in checks:
                self.filter_stats[check] += 1

    def get_filter_statistics(self):
        """Rejection counts per check since startup."""
        with self._stats_lock:
            return dict(self.filter_stats)
