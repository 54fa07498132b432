"""Tests for the pass/fail decision and the alert report."""

from dataclasses import replace

import pytest

from filters import FILTER_CHECKS, ListingFilter
from models import ContentSignals, Sentiment, TeamMention, UseCaseDepth


def test_all_checks_passing(config, listing, passing_market, passing_social, passing_content):
    verdict = ListingFilter(config).evaluate(listing, passing_market, passing_social, passing_content)

    assert verdict.passed is True
    assert verdict.token == "ABC"
    assert verdict.failed_checks == ()
    assert "$ABC" in verdict.report


# Each case moves exactly one input just across its threshold.
SINGLE_FAILURES = [
    ("liquidity", "market", {"liquidity_usd": 99_999.99}),
    ("volume", "market", {"volume_24h": 999_999}),
    ("fdv", "market", {"fdv": 1_999_999}),
    ("influencers", "social", {"influencer_count": 1}),
    ("mentions", "social", {"mention_count": 49}),
    ("sentiment", "social", {"sentiment": Sentiment.NEUTRAL}),
    ("team", "content", {"team": TeamMention.NOT_FOUND}),
    ("use_case", "content", {"use_case": UseCaseDepth.VAGUE}),
]


@pytest.mark.parametrize("check,target,changes", SINGLE_FAILURES, ids=[case[0] for case in SINGLE_FAILURES])
def test_single_failing_check_fails_verdict(check, target, changes, config, listing,
                                            passing_market, passing_social, passing_content):
    inputs = {"market": passing_market, "social": passing_social, "content": passing_content}
    inputs[target] = replace(inputs[target], **changes)
    listing_filter = ListingFilter(config)

    verdict = listing_filter.evaluate(listing, inputs["market"], inputs["social"], inputs["content"])

    assert verdict.passed is False
    assert verdict.report is None
    assert verdict.failed_checks == (check,)
    assert listing_filter.get_filter_statistics()[check] == 1


def test_all_check_names_are_covered():
    assert sorted(case[0] for case in SINGLE_FAILURES) == sorted(FILTER_CHECKS)


def test_thresholds_are_inclusive(config, listing, passing_market, passing_social, passing_content):
    market = replace(passing_market, liquidity_usd=100_000, volume_24h=1_000_000, fdv=2_000_000)
    social = replace(passing_social, influencer_count=2, mention_count=50)
    assert ListingFilter(config).evaluate(listing, market, social, passing_content).passed is True


@pytest.mark.parametrize("sentiment", [Sentiment.NEGATIVE, Sentiment.NEUTRAL, Sentiment.UNAVAILABLE])
def test_only_positive_sentiment_passes(sentiment, config, listing, passing_market, passing_social,
                                        passing_content):
    social = replace(passing_social, sentiment=sentiment)
    assert ListingFilter(config).evaluate(listing, passing_market, social, passing_content).passed is False


def test_unavailable_content_does_not_block(config, listing, passing_market, passing_social):
    verdict = ListingFilter(config).evaluate(listing, passing_market, passing_social, ContentSignals.unavailable())
    assert verdict.passed is True
    assert "Team: N/A" in verdict.report


@pytest.mark.parametrize("missing", ["market", "social", "both"])
def test_missing_snapshot_always_fails(missing, config, listing, passing_market, passing_social, passing_content):
    market = None if missing in ("market", "both") else passing_market
    social = None if missing in ("social", "both") else passing_social
    listing_filter = ListingFilter(config)

    verdict = listing_filter.evaluate(listing, market, social, passing_content)

    assert verdict.passed is False
    assert verdict.report is None
    assert verdict.failed_checks == ("no_data",)
    assert listing_filter.get_filter_statistics()["no_data"] == 1


def test_several_failures_are_all_reported(config, listing, passing_market, passing_social, passing_content):
    market = replace(passing_market, liquidity_usd=0, fdv=0)
    verdict = ListingFilter(config).evaluate(listing, market, passing_social, passing_content)
    assert verdict.failed_checks == ("liquidity", "fdv")


def test_thresholds_are_configurable(config, listing, passing_market, passing_social, passing_content):
    config["MIN_MENTIONS"] = 100
    verdict = ListingFilter(config).evaluate(listing, passing_market, passing_social, passing_content)
    assert verdict.failed_checks == ("mentions",)


def test_filter_statistics_accumulate(config, listing, passing_social, passing_content):
    listing_filter = ListingFilter(config)
    listing_filter.evaluate(listing, None, passing_social, passing_content)
    listing_filter.evaluate(listing, None, passing_social, passing_content)

    stats = listing_filter.get_filter_statistics()
    stats["no_data"] = 0

    assert listing_filter.get_filter_statistics()["no_data"] == 2


def test_report_structure(config, listing, passing_market, passing_social, passing_content):
    report = ListingFilter(config).evaluate(listing, passing_market, passing_social, passing_content).report

    expected_lines = [
        "Token: $ABC (MEXC Will List $ABC)",
        "Price: $0.0421 (+12.50% in 1h)",
        "Liquidity: $150,000",
        "Volume: $2,000,000 (24h)",
        "FDV: $3,000,000",
        "- Pair: ABC/USDT",
        "- Influencers: 3 (≥5,000 followers)",
        "- Mentions: 60",
        "- Engagement: 420 likes, 37 retweets",
        "- Sentiment: Positive",
        "- Team: Mentioned",
        "- Use Case: Detailed",
        "- DexScreener: https://dexscreener.com/ethereum/0xpair",
        "- Twitter: https://twitter.com/search?q=ABC",
        "- Announcement: https://www.mexc.com/support/articles/123",
    ]
    lines = report.splitlines()
    for line in expected_lines:
        assert line in lines
    assert lines.index("- DexScreener: https://dexscreener.com/ethereum/0xpair") > lines.index("- Sentiment: Positive")
