# listing_monitor.py

import logging
from dataclasses import dataclass, field
from typing import Dict

from alert_dispatcher import AlertDispatcher
from content_analyzer import ContentAnalyzer
from filters import ListingFilter
from listing_discovery import ListingDiscovery
from market_data import DexScreenerClient
from models import Listing, Verdict
from social_analyzer import SocialAnalyzer

logger = logging.getLogger("ListingMonitor")


@dataclass
class CycleSummary:
    discovered: int = 0
    alerted: int = 0
    rejected: int = 0
    failed_deliveries: int = 0
    rejections: Dict[str, int] = field(default_factory=dict)  # failed check -> count, this cycle only


class ListingMonitor:
    """
    One discovery -> enrich -> decide -> alert pass.
    Listings are handled strictly one after another.
    """

    def __init__(self, discovery: ListingDiscovery, market: DexScreenerClient,
                 social: SocialAnalyzer, content: ContentAnalyzer,
                 listing_filter: ListingFilter, dispatcher: AlertDispatcher):
        self.discovery = discovery
        self.market = market
        self.social = social
        self.content = content
        self.listing_filter = listing_filter
        self.dispatcher = dispatcher

    def run_cycle(self) -> CycleSummary:
        summary = CycleSummary()
        listings = self.discovery.fetch_new_listings()
        summary.discovered = len(listings)

        for listing in listings:
            verdict = self.process_listing(listing)
            if not verdict.passed:
                summary.rejected += 1
                for check in verdict.failed_checks:
                    summary.rejections[check] = summary.rejections.get(check, 0) + 1
            elif self.dispatcher.dispatch(verdict):
                summary.alerted += 1
            else:
                summary.failed_deliveries += 1

        logger.info(
            f"[CYCLE] Done: {summary.discovered} discovered, {summary.alerted} alerted, "
            f"{summary.rejected} rejected, {summary.failed_deliveries} failed deliveries"
        )
        self.print_filter_stats(summary)
        return summary

    def process_listing(self, listing: Listing) -> Verdict:
        logger.info(f"Processing {listing.token}...")
        market = self.market.fetch_snapshot(listing.token)
        social = self.social.analyze(listing.token)
        content = self.content.analyze(listing)
        return self.listing_filter.evaluate(listing, market, social, content)

    def print_filter_stats(self, summary: CycleSummary):
        if not summary.rejections:
            return
        totals = self.listing_filter.get_filter_statistics()
        logger.info("📊 Filter Rejection Summary (last cycle)")
        for key, count in summary.rejections.items():
            logger.info(
                f"- {key.replace('_', ' ').capitalize()} Failures: {count} "
                f"({totals.get(key, count)} since start)"
            )
