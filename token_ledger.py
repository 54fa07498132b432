# Filename: token_ledger.py

import logging
import threading
from typing import Iterable, Optional, Set

logger = logging.getLogger("TokenLedger")


class TokenLedger:
    """
    In-memory set of token symbols already alerted during this process lifetime.
    Entries never expire and are never written to disk.
    """

    def __init__(self, tokens: Optional[Iterable[str]] = None):
        self._tokens: Set[str] = set(tokens or ())
        self._lock = threading.Lock()

    def should_process(self, token: str) -> bool:
        with self._lock:
            return token not in self._tokens

    def mark_alerted(self, token: str) -> bool:
        """Returns False if the token was already recorded."""
        with self._lock:
            if token in self._tokens:
                return False
            self._tokens.add(token)
        logger.info(f"[LEDGER] {token} recorded as alerted ({len(self)} total).")
        return True

    def snapshot(self) -> Set[str]:
        with self._lock:
            return set(self._tokens)

    def __contains__(self, token: str) -> bool:
        return not self.should_process(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
