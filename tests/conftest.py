"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import DEFAULT_CONFIG  # noqa: E402
from models import (  # noqa: E402
    ContentSignals,
    Listing,
    MarketSnapshot,
    SearchResult,
    Sentiment,
    SocialPost,
    SocialSnapshot,
    TeamMention,
    UseCaseDepth,
)

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Wall clock whose sleep() advances time instead of blocking."""

    def __init__(self, start: float = NOW.timestamp()):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeSocialClient:
    """Replays queued SearchResults or exceptions, one per search() call."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def search(self, query, max_results, tweet_fields=(), expansions=None, user_fields=None):
        self.calls.append({
            "query": query,
            "max_results": max_results,
            "tweet_fields": tweet_fields,
            "expansions": expansions,
            "user_fields": user_fields,
        })
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeNotifier:
    def __init__(self, error: Exception = None):
        self.error = error
        self.sent = []

    def send_message(self, text):
        if self.error is not None:
            raise self.error
        self.sent.append(text)


def make_post(text, age=timedelta(minutes=10), post_id="1", author_id=None,
              likes=0, retweets=0):
    return SocialPost(
        id=post_id,
        text=text,
        created_at=NOW - age,
        author_id=author_id,
        like_count=likes,
        retweet_count=retweets,
    )


@pytest.fixture
def config():
    cfg = dict(DEFAULT_CONFIG)
    cfg.update({
        "TWITTER_BEARER_TOKEN": "x-token",
        "TELEGRAM_BOT_TOKEN": "tg-token",
        "TELEGRAM_CHAT_ID": "12345",
        "MIN_LIQUIDITY_USD": 100_000,
        "MIN_VOLUME_USD": 1_000_000,
        "MIN_FDV_USD": 2_000_000,
        "MIN_INFLUENCERS": 2,
        "MIN_MENTIONS": 50,
    })
    return cfg


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def listing():
    return Listing(
        token="ABC",
        title="MEXC Will List $ABC",
        link="https://www.mexc.com/support/articles/123",
        announced_at=NOW - timedelta(minutes=5),
        post_id="999",
    )


@pytest.fixture
def passing_market():
    return MarketSnapshot(
        price_usd=0.0421,
        price_change_1h=12.5,
        liquidity_usd=150_000,
        volume_24h=2_000_000,
        fdv=3_000_000,
        pair_label="ABC/USDT",
        source_link="https://dexscreener.com/ethereum/0xpair",
    )


@pytest.fixture
def passing_social():
    return SocialSnapshot(
        influencer_count=3,
        mention_count=60,
        total_likes=420,
        total_retweets=37,
        sentiment=Sentiment.POSITIVE,
        source_link="https://twitter.com/search?q=ABC",
    )


@pytest.fixture
def passing_content():
    return ContentSignals(team=TeamMention.MENTIONED, use_case=UseCaseDepth.DETAILED)


@pytest.fixture
def empty_result():
    return SearchResult()
