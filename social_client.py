# Filename: social_client.py

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import requests
import tweepy

from models import SearchResult, SocialPost
from rate_limit import Throttled, parse_rate_limit_headers

logger = logging.getLogger("SocialSearchClient")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parses the API's ISO-8601 timestamps ("2024-05-01T12:00:00.000Z")."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"[X] Unparseable timestamp: {value}")
        return None


class SocialSearchClient:
    """
    Thin adapter over the X API v2 recent search endpoint.

    Responses are requested raw so the rate-limit headers stay available;
    an exhausted window surfaces as `Throttled` carrying the reset time.
    """

    def __init__(self, bearer_token: str, client: Any = None):
        self.client = client or tweepy.Client(
            bearer_token=bearer_token,
            return_type=requests.Response,
            wait_on_rate_limit=False,
        )

    def search(self, query: str, max_results: int,
               tweet_fields: Iterable[str] = ("created_at", "text"),
               expansions: Optional[Iterable[str]] = None,
               user_fields: Optional[Iterable[str]] = None) -> SearchResult:
        params: Dict[str, Any] = {
            "query": query,
            "max_results": max_results,
            "tweet_fields": list(tweet_fields),
        }
        if expansions:
            params["expansions"] = list(expansions)
        if user_fields:
            params["user_fields"] = list(user_fields)

        try:
            response = self.client.search_recent_tweets(**params)
        except tweepy.TooManyRequests as e:
            raise Throttled(parse_rate_limit_headers(getattr(e.response, "headers", None))) from e

        payload = response.json() or {}
        return SearchResult(
            posts=self._parse_posts(payload.get("data") or []),
            users=self._parse_users((payload.get("includes") or {}).get("users") or []),
            rate_limit=parse_rate_limit_headers(response.headers),
        )

    @staticmethod
    def _parse_posts(raw_posts: List[Dict[str, Any]]) -> List[SocialPost]:
        posts = []
        for raw in raw_posts:
            metrics = raw.get("public_metrics") or {}
            posts.append(SocialPost(
                id=str(raw.get("id", "")),
                text=raw.get("text") or "",
                created_at=parse_timestamp(raw.get("created_at")),
                author_id=raw.get("author_id"),
                like_count=int(metrics.get("like_count") or 0),
                retweet_count=int(metrics.get("retweet_count") or 0),
            ))
        return posts

    @staticmethod
    def _parse_users(raw_users: List[Dict[str, Any]]) -> Dict[str, int]:
        return {
            str(user.get("id")): int((user.get("public_metrics") or {}).get("followers_count") or 0)
            for user in raw_users
        }
