from models import ContentSignals, Listing, MarketSnapshot, SocialSnapshot


def format_listing_alert(listing: Listing, market: MarketSnapshot, social: SocialSnapshot,
                         content: ContentSignals, influencer_threshold: int) -> str:
    """Format the alert text for a listing that passed every filter."""
    price = f"${market.price_usd:.8g}"
    change = f"{market.price_change_1h:+.2f}%"
    liquidity = f"${market.liquidity_usd:,.0f}"
    volume = f"${market.volume_24h:,.0f}"
    fdv = f"${market.fdv:,.0f}"

    text = "🚨 High-Potential Token Alert 🚨\n\n"
    text += f"Token: ${listing.token} ({listing.title})\n"
    text += f"Price: {price} ({change} in 1h)\n"
    text += f"Liquidity: {liquidity}\n"
    text += f"Volume: {volume} (24h)\n"
    text += f"FDV: {fdv}\n"

    text += "\n📊 DexScreener Data:\n"
    text += f"- Pair: {market.pair_label}\n"
    text += "- Holders: N/A (Manual Check)\n"

    text += "\n🐦 Twitter Analysis:\n"
    text += f"- Influencers: {social.influencer_count} (≥{influencer_threshold:,} followers)\n"
    text += f"- Mentions: {social.mention_count}\n"
    text += f"- Engagement: {social.total_likes:,} likes, {social.total_retweets:,} retweets\n"
    text += f"- Sentiment: {social.sentiment.value}\n"

    text += "\n🔍 Fundamentals:\n"
    text += f"- Team: {content.team.value}\n"
    text += f"- Use Case: {content.use_case.value}\n"

    text += "\n🔗 Links:\n"
    text += f"- DexScreener: {market.source_link}\n"
    text += f"- Twitter: {social.source_link}\n"
    text += f"- Announcement: {listing.link}"

    return text
