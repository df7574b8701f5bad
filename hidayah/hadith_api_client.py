# hidayah/hadith_api_client.py
from typing import List, Optional

from .api_client import JSONAPIClient
from .exceptions import HadithAPIError
from .hadith_merger import merge_editions, normalize_chapter
from .models import Collection, Hadith


class HadithAPIClient(JSONAPIClient):
    EDITIONS_URL = "https://cdn.jsdelivr.net/gh/fawazahmed0/hadith-api@1/editions/"
    error_class = HadithAPIError

    def __init__(self, session=None, timeout: Optional[float] = None, chapter_api_url: str = "",
                 show_progress: bool = True):
        super().__init__(session=session, timeout=timeout, show_progress=show_progress)
        self.chapter_api_url = (chapter_api_url or "").rstrip("/")

    def edition_url(self, edition: str) -> str:
        return f"{self.EDITIONS_URL}{edition}.json"

    def fetch_collection(self, collection: Collection) -> List[Hadith]:
        """
        Load the Arabic, English and Urdu editions of a collection and merge them.

        Either all three editions load or HadithAPIError is raised; a
        two-language result is never returned.
        """
        ara_json, eng_json, urd_json = self.fetch_all(
            [
                self.edition_url(collection.ara_edition),
                self.edition_url(collection.eng_edition),
                self.edition_url(collection.urd_edition),
            ],
            desc=f"Loading {collection.label}",
        )
        return merge_editions(collection, ara_json, eng_json, urd_json)

    def chapter_url(self, collection: Collection, chapter: int) -> str:
        return f"{self.chapter_api_url}/{collection.chapter_book}/{chapter}.json"

    def fetch_chapter(self, collection: Collection, chapter: int) -> List[Hadith]:
        """Load a single chapter from the per-chapter API."""
        if not self.chapter_api_url:
            raise HadithAPIError("Chapter API URL is not configured")
        if chapter < 1:
            raise HadithAPIError(f"Invalid chapter number: {chapter}")
        payload = self.get_json(self.chapter_url(collection, chapter))
        return normalize_chapter(collection, payload)
