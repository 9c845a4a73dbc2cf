"""Candidate word sources."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol

import requests

from ..core.exceptions import CandidateFetchFailed
from ..engine.topology import validate_word_length
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class WordSource(Protocol):
    """Protocol implemented by all candidate providers."""

    def fetch_candidates(self, length: int) -> List[str]:
        ...


class RandomWordApiSource:
    """Fetch random English words from the public random-word API."""

    API_URL = "https://random-word-api.herokuapp.com/word"

    def __init__(
        self,
        number: int = 1000,
        language: str = "en",
        api_url: str = API_URL,
        timeout_seconds: float = 15.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.number = number
        self.language = language
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self._http = session or requests

    def fetch_candidates(self, length: int) -> List[str]:
        validate_word_length(length)
        params = {"length": length, "number": self.number, "lang": self.language}
        try:
            response = self._http.get(self.api_url, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise CandidateFetchFailed(f"Word request failed: {exc}") from exc
        except ValueError as exc:
            raise CandidateFetchFailed(f"Word API returned invalid JSON: {exc}") from exc

        words = self._parse_payload(data)
        LOGGER.info("Fetched %d candidate words of length %d", len(words), length)
        return words

    @staticmethod
    def _parse_payload(data: Any) -> List[str]:
        if not isinstance(data, list) or not all(isinstance(word, str) for word in data):
            raise CandidateFetchFailed("Word API response is not a list of strings")
        return list(data)


class StaticWordSource:
    """Serve candidates from an in-memory word list."""

    def __init__(
        self,
        words: Iterable[str],
        shuffle: bool = False,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.words = [word.strip() for word in words if word and word.strip()]
        self.shuffle = shuffle
        self.rng = rng or random.Random()

    def fetch_candidates(self, length: int) -> List[str]:
        validate_word_length(length)
        matching = [word for word in self.words if len(word) == length]
        if self.shuffle:
            self.rng.shuffle(matching)
        return matching


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries
