# Filename: listing_discovery.py

import re
import time
import logging
from datetime import timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from models import Listing, SocialPost
from rate_limit import call_with_rate_limit_retry, log_rate_limit
from token_ledger import TokenLedger

logger = logging.getLogger("ListingDiscovery")

TOKEN_PATTERN = re.compile(r"\$([A-Z]{2,10})")
URL_PATTERN = re.compile(r"https?://\S+")


def extract_token_symbol(text: str) -> Optional[str]:
    """First "$SYMBOL" (2-10 uppercase letters) in the text, without the "$"."""
    match = TOKEN_PATTERN.search(text or "")
    return match.group(1) if match else None


def extract_first_url(text: str) -> Optional[str]:
    match = URL_PATTERN.search(text or "")
    return match.group(0) if match else None


def first_line(text: str) -> str:
    return (text or "").split("\n", 1)[0]


def build_listing_query(account: str, phrases: Iterable[str]) -> str:
    quoted = " OR ".join(f'"{phrase}"' for phrase in phrases)
    return f"from:{account} ({quoted})"


def post_permalink(account: str, post_id: str) -> str:
    return f"https://twitter.com/{account}/status/{post_id}"


class ListingDiscovery:
    """
    Finds recent listing announcements from the monitored account.

    The ledger is only read here; ListingDiscovery never records tokens.
    """

    def __init__(self, client, ledger: TokenLedger, config: Dict[str, Any],
                 clock: Callable[[], float] = time.time,
                 sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.ledger = ledger
        self.clock = clock
        self.sleep = sleep
        self.account = config["LISTING_ACCOUNT"]
        self.query = build_listing_query(self.account, config["LISTING_PHRASES"])
        self.max_results = config.get("LISTING_MAX_RESULTS", 20)
        self.recency_window = config.get("LISTING_RECENCY_WINDOW_SECONDS", 2 * 3600)

    def fetch_new_listings(self) -> List[Listing]:
        logger.info(f"[DISCOVERY] Checking {self.account} for new listings...")
        try:
            result = call_with_rate_limit_retry(
                lambda: self.client.search(
                    self.query,
                    max_results=self.max_results,
                    tweet_fields=("created_at", "text"),
                ),
                label="Listings",
                clock=self.clock,
                sleep=self.sleep,
            )
        except Exception as e:
            logger.error(f"[DISCOVERY] Error fetching listings: {e}")
            return []

        log_rate_limit("Listings", result.rate_limit)
        listings = self.extract_listings(result.posts)
        logger.info(f"[DISCOVERY] {len(listings)} new listing(s) out of {len(result.posts)} post(s).")
        return listings

    def extract_listings(self, posts: Iterable[SocialPost]) -> List[Listing]:
        now = self.clock()
        listings: List[Listing] = []
        seen = set()

        for post in posts:
            if not self._is_recent(post, now):
                continue

            token = extract_token_symbol(post.text)
            if not token:
                continue
            if token in seen or not self.ledger.should_process(token):
                logger.debug(f"[DISCOVERY] Skipping already handled token {token}")
                continue
            seen.add(token)

            listings.append(Listing(
                token=token,
                title=first_line(post.text),
                link=extract_first_url(post.text) or post_permalink(self.account, post.id),
                announced_at=post.created_at,
                post_id=post.id,
            ))

        return listings

    def _is_recent(self, post: SocialPost, now: float) -> bool:
        if post.created_at is None:
            return False
        created_at = post.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return now - created_at.timestamp() < self.recency_window
