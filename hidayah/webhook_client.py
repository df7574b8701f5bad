# hidayah/webhook_client.py
from typing import Optional

import requests

from .api_client import JSONAPIClient
from .exceptions import WebhookError
from .models import WebhookRecord


class WebhookClient(JSONAPIClient):
    """
    Client for the free-form lookup webhook.

    The webhook takes {"type", "collection"|"surah", "query"|"verse"} and
    answers with one loosely structured record.
    """
    error_class = WebhookError

    def __init__(self, url: str, session=None, timeout: Optional[float] = None):
        super().__init__(session=session, timeout=timeout, show_progress=False)
        self.url = url

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def _post(self, body: dict) -> WebhookRecord:
        if not self.enabled:
            raise WebhookError("Webhook URL is not configured")
        try:
            response = self.session.post(self.url, json=body, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise WebhookError(f"Request failed: {e}")
        data = self._handle_response(response)
        return self._parse_record(data)

    @staticmethod
    def _parse_record(data) -> WebhookRecord:
        if isinstance(data, list):
            data = data[0] if data else {}
        if not isinstance(data, dict):
            raise WebhookError("Unexpected webhook response")
        fields = {}
        for key in ("text", "reference", "narrator", "chain", "grade"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                value = str(value)
            fields[key] = value or None
        return WebhookRecord(**fields)

    def lookup_hadith(self, collection: str, query: str) -> WebhookRecord:
        return self._post({"type": "hadith", "collection": collection, "query": query})

    def lookup_verse(self, surah: int, verse: int) -> WebhookRecord:
        return self._post({"type": "quran", "surah": surah, "verse": verse})
