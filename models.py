# Filename: models.py

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    UNAVAILABLE = "N/A"


class TeamMention(str, Enum):
    MENTIONED = "Mentioned"
    NOT_FOUND = "Not found"
    UNAVAILABLE = "N/A"


class UseCaseDepth(str, Enum):
    DETAILED = "Detailed"
    VAGUE = "Vague"
    UNAVAILABLE = "N/A"


@dataclass(frozen=True)
class Listing:
    """
    Listing represents one exchange-listing announcement naming a single token.
    Built by ListingDiscovery from a raw post and dropped after one pipeline pass.
    """
    token: str                       # Token symbol without the leading "$"
    title: str                       # First line of the announcement text
    link: str                        # First URL in the text, or the post permalink
    announced_at: datetime           # Post creation time (UTC)
    post_id: str = ""                # Source post id


@dataclass(frozen=True)
class MarketSnapshot:
    price_usd: float
    price_change_1h: float
    liquidity_usd: float
    volume_24h: float
    fdv: float
    pair_label: str                  # e.g. "ABC/USDT"
    source_link: str                 # DexScreener pair page


@dataclass(frozen=True)
class SocialSnapshot:
    influencer_count: int
    mention_count: int
    total_likes: int
    total_retweets: int
    sentiment: Sentiment
    source_link: str

    @classmethod
    def unavailable(cls, source_link: str = "") -> "SocialSnapshot":
        return cls(
            influencer_count=0,
            mention_count=0,
            total_likes=0,
            total_retweets=0,
            sentiment=Sentiment.UNAVAILABLE,
            source_link=source_link,
        )


@dataclass(frozen=True)
class ContentSignals:
    team: TeamMention
    use_case: UseCaseDepth

    @classmethod
    def unavailable(cls) -> "ContentSignals":
        return cls(team=TeamMention.UNAVAILABLE, use_case=UseCaseDepth.UNAVAILABLE)


@dataclass(frozen=True)
class Verdict:
    token: str
    passed: bool
    report: Optional[str] = None     # Only rendered when passed
    failed_checks: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RateLimitInfo:
    remaining: Optional[int] = None
    limit: Optional[int] = None
    reset_epoch_seconds: Optional[float] = None


@dataclass(frozen=True)
class SocialPost:
    id: str
    text: str
    created_at: Optional[datetime]
    author_id: Optional[str] = None
    like_count: int = 0
    retweet_count: int = 0


@dataclass(frozen=True)
class SearchResult:
    """Normalized response of one social search call."""
    posts: List[SocialPost] = field(default_factory=list)
    users: Dict[str, int] = field(default_factory=dict)   # author id -> follower count
    rate_limit: Optional[RateLimitInfo] = None
