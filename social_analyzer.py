"""
Social analysis of a token on X/Twitter.

Aggregates mention volume, engagement, influencer reach and a lexical
sentiment label from one recent-search call per token.
"""

import time
import logging
from typing import Any, Callable, Dict, Iterable, Optional
from urllib.parse import quote

from afinn import Afinn

from models import SearchResult, Sentiment, SocialSnapshot
from rate_limit import call_with_rate_limit_retry, log_rate_limit

logger = logging.getLogger("SocialAnalyzer")

# text -> score; positive is bullish, 0 means "no opinion"
SentimentScorer = Callable[[str], float]

_afinn: Optional[Afinn] = None


def afinn_sentiment_score(text: str) -> float:
    """AFINN lexicon score of the whitespace-tokenized text."""
    global _afinn
    if _afinn is None:
        _afinn = Afinn(language="en")
    return _afinn.score(" ".join((text or "").split()))


def aggregate_sentiment(scores: Iterable[float]) -> Sentiment:
    """
    Averages the non-zero scores only.

    [2, -1, 0, 3] -> (2 - 1 + 3) / 3 > 0 -> POSITIVE
    [0, 0]        -> no contributor      -> NEUTRAL
    """
    total = 0.0
    contributors = 0
    for score in scores:
        if score != 0:
            total += score
            contributors += 1

    if contributors == 0:
        return Sentiment.NEUTRAL
    return Sentiment.POSITIVE if total / contributors > 0 else Sentiment.NEGATIVE


def build_social_query(token: str) -> str:
    return f"({token} OR ${token}) -is:retweet"


def social_search_link(token: str) -> str:
    return f"https://twitter.com/search?q={quote(token)}"


class SocialAnalyzer:
    def __init__(self, client, config: Dict[str, Any],
                 sentiment_scorer: SentimentScorer = afinn_sentiment_score,
                 clock: Callable[[], float] = time.time,
                 sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.sentiment_scorer = sentiment_scorer
        self.clock = clock
        self.sleep = sleep
        self.max_results = config.get("SOCIAL_MAX_RESULTS", 100)
        self.influencer_threshold = config.get("INFLUENCER_FOLLOWER_THRESHOLD", 5000)

    def analyze(self, token: str) -> SocialSnapshot:
        try:
            result = call_with_rate_limit_retry(
                lambda: self.client.search(
                    build_social_query(token),
                    max_results=self.max_results,
                    tweet_fields=("public_metrics", "created_at"),
                    expansions=("author_id",),
                    user_fields=("public_metrics",),
                ),
                label="Analysis",
                clock=self.clock,
                sleep=self.sleep,
            )
            log_rate_limit("Analysis", result.rate_limit)
            snapshot = self.summarize(token, result)
        except Exception as e:
            logger.error(f"[SOCIAL] Error analyzing X/Twitter for {token}: {e}")
            return SocialSnapshot.unavailable()

        logger.info(
            f"[SOCIAL] {token}: {snapshot.mention_count} mentions, "
            f"{snapshot.influencer_count} influencers, sentiment {snapshot.sentiment.value}"
        )
        return snapshot

    def summarize(self, token: str, result: SearchResult) -> SocialSnapshot:
        influencers = 0
        total_likes = 0
        total_retweets = 0
        scores = []

        for post in result.posts:
            total_likes += post.like_count
            total_retweets += post.retweet_count

            followers = result.users.get(post.author_id, 0) if post.author_id else 0
            if followers >= self.influencer_threshold:
                influencers += 1

            scores.append(self.sentiment_scorer(post.text))

        return SocialSnapshot(
            influencer_count=influencers,
            mention_count=len(result.posts),
            total_likes=total_likes,
            total_retweets=total_retweets,
            sentiment=aggregate_sentiment(scores),
            source_link=social_search_link(token),
        )
