# hidayah/hadith_browser.py
from typing import List, Optional

from .exceptions import HadithAPIError, NoResultsError
from .hadith_api_client import HadithAPIClient
from .models import Collection, Hadith, PagedView
from .notifications import Notifier
from .pagination import DEFAULT_PAGE_SIZE, paginate
from .registry import DEFAULT_COLLECTION, get_collection
from .request_guard import RequestGuard


class HadithBrowser:
    """
    State behind the hadith screen: selected collection, query, page and the
    merged records currently on display.
    """

    def __init__(self, client: HadithAPIClient, notifier: Optional[Notifier] = None,
                 page_size: int = DEFAULT_PAGE_SIZE, collection: str = DEFAULT_COLLECTION):
        self.client = client
        self.notifier = notifier or Notifier()
        self.page_size = page_size
        self.guard = RequestGuard()
        self.collection: Collection = get_collection(collection) or get_collection(DEFAULT_COLLECTION)
        self.records: List[Hadith] = []
        self.query = ""
        self.page = 1

    # --- Selection ---
    def select_collection(self, value: str) -> Collection:
        collection = get_collection(value)
        if collection is None:
            raise ValueError(f"Unknown collection: {value}")
        self.collection = collection
        self.records = []
        self.page = 1
        # Anything still loading belongs to the old collection
        self.guard.invalidate()
        return collection

    def set_query(self, query: str):
        self.query = query or ""
        self.page = 1

    # --- Loading ---
    def load(self, chapter: Optional[int] = None) -> bool:
        """
        Fetch and merge the selected collection (or one chapter of it).

        Returns True when new records were put on display. Failures become
        notifications; nothing is raised to the caller.
        """
        token = self.guard.issue()
        collection = self.collection
        self.records = []
        self.page = 1
        try:
            if chapter is None:
                merged = self.client.fetch_collection(collection)
            else:
                merged = self.client.fetch_chapter(collection, chapter)
            if not merged:
                raise NoResultsError(f"No hadiths in {collection.label}")
        except HadithAPIError:
            if self.guard.is_current(token):
                self.notifier.error("Error loading hadiths", "Please try again")
            return False
        except NoResultsError:
            if self.guard.is_current(token):
                self.notifier.error("No hadiths found", "Try a different collection or search term")
            return False

        if not self.guard.is_current(token):
            return False
        self.records = merged
        self.page = 1
        self.notifier.success(
            "Hadiths loaded successfully",
            f"Loaded {len(merged)} hadiths from {collection.label}",
        )
        return True

    # --- Paging ---
    def view(self) -> PagedView:
        paged = paginate(self.records, self.query, self.page, self.page_size)
        self.page = paged.page
        return paged

    def go_to_page(self, page: int) -> PagedView:
        self.page = page
        return self.view()

    def next_page(self) -> PagedView:
        return self.go_to_page(self.page + 1)

    def previous_page(self) -> PagedView:
        return self.go_to_page(self.page - 1)
