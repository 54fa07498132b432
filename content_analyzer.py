# Filename: content_analyzer.py

import logging
from typing import Any, Callable, Dict, Optional

import requests
from bs4 import BeautifulSoup

from models import ContentSignals, Listing, TeamMention, UseCaseDepth

logger = logging.getLogger("ContentAnalyzer")

DETAILED_TEXT_LENGTH = 500

ContentClassifier = Callable[[str], ContentSignals]


def extract_page_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup
    return root.get_text()


def classify_page_text(text: str) -> ContentSignals:
    """Coarse heuristic: a "team" mention and more than 500 characters of text."""
    team = TeamMention.MENTIONED if "team" in text.lower() else TeamMention.NOT_FOUND
    use_case = UseCaseDepth.DETAILED if len(text) > DETAILED_TEXT_LENGTH else UseCaseDepth.VAGUE
    return ContentSignals(team=team, use_case=use_case)


class ContentAnalyzer:
    def __init__(self, config: Dict[str, Any], session: Optional[requests.Session] = None,
                 classifier: ContentClassifier = classify_page_text):
        self.classifier = classifier
        self.timeout = config.get("REQUEST_TIMEOUT_SECONDS", 15)
        self.session = session or requests.Session()
        if config.get("USER_AGENT"):
            self.session.headers.update({"User-Agent": config["USER_AGENT"]})

    def analyze(self, listing: Listing) -> ContentSignals:
        try:
            response = self.session.get(listing.link, timeout=self.timeout)
            response.raise_for_status()
            signals = self.classifier(extract_page_text(response.text))
        except Exception as e:
            status = getattr(getattr(e, "response", None), "status_code", None)
            logger.error(f"[CONTENT] Error fetching fundamentals for {listing.token}: {status or e}")
            return ContentSignals.unavailable()

        logger.info(f"[CONTENT] {listing.token}: team {signals.team.value}, use case {signals.use_case.value}")
        return signals
