"""Client for the free dictionary API used for post-game definitions."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests

from ..core.exceptions import DefinitionFetchFailed
from ..core.models import Meaning, WordDefinition
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class DefinitionSource(Protocol):
    def fetch_definitions(self, words: Sequence[str]) -> List[WordDefinition]:
        """Return one entry per word, in input order."""


class DictionaryApiClient:
    """Minimal client around https://dictionaryapi.dev.

    A 404 for a single word yields a placeholder entry; any other failure
    fails the whole batch with :class:`DefinitionFetchFailed`.
    """

    API_BASE = "https://api.dictionaryapi.dev/api/v2/entries/en"

    def __init__(
        self,
        api_base: str = API_BASE,
        timeout_seconds: float = 15.0,
        max_workers: int = 6,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_workers = max_workers
        self._http = session or requests

    def fetch_definitions(self, words: Sequence[str]) -> List[WordDefinition]:
        if not words:
            return []
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(words))) as pool:
            return list(pool.map(self.fetch_word, words))

    def fetch_word(self, word: str) -> WordDefinition:
        url = f"{self.api_base}/{word}"
        try:
            response = self._http.get(url, timeout=self.timeout_seconds)
            if response.status_code == 404:
                LOGGER.warning("Unable to find entry for %s in dictionary API", word)
                return WordDefinition.missing(word)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise DefinitionFetchFailed(f"Definition request for '{word}' failed: {exc}") from exc
        except ValueError as exc:
            raise DefinitionFetchFailed(f"Invalid JSON for '{word}': {exc}") from exc

        try:
            return self._parse_entry(word, payload)
        except (KeyError, IndexError, TypeError) as exc:
            raise DefinitionFetchFailed(f"Unexpected payload for '{word}': {exc}") from exc

    @staticmethod
    def _parse_entry(word: str, payload: List[Dict[str, Any]]) -> WordDefinition:
        entry = payload[0]
        audio_url = ""
        for phonetic in entry.get("phonetics") or []:
            if phonetic.get("audio"):
                audio_url = phonetic["audio"]
                break

        meanings = [
            Meaning(
                part_of_speech=meaning.get("partOfSpeech", ""),
                definition=meaning["definitions"][0]["definition"],
            )
            for meaning in entry.get("meanings") or []
        ]
        return WordDefinition(word=word, audio_url=audio_url, meanings=meanings)
