# hidayah/api_client.py
import concurrent.futures
import json
from typing import List, Optional, Type

import requests
import tqdm
from colorama import Fore

from .exceptions import HidayahError
from .version import VERSION


class JSONAPIClient:
    """
    Shared plumbing for the read-only JSON APIs.

    Subclasses set `error_class` so callers see HadithAPIError/QuranAPIError
    instead of raw requests exceptions.
    """
    TIMEOUT = 10
    MAX_WORKERS = 4
    error_class: Type[HidayahError] = HidayahError

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None,
                 show_progress: bool = True):
        self.session = session or requests.Session()
        if session is None:
            self.session.headers.update({"User-Agent": f"HidayahClient/{VERSION}"})
        self.timeout = timeout or self.TIMEOUT
        self.show_progress = show_progress

    def _handle_response(self, response: requests.Response):
        """Handle API response and return JSON data"""
        try:
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise self.error_class(f"Request failed: {e}")
        except (json.JSONDecodeError, ValueError) as e:
            raise self.error_class(f"Invalid JSON response: {e}")

    def get_json(self, url: str):
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise self.error_class(f"Request failed: {e}")
        return self._handle_response(response)

    def fetch_all(self, urls: List[str], desc: str = "Loading") -> list:
        """
        Fetch every URL in parallel and return the decoded bodies in input order.

        All requests are allowed to settle. If any of them failed, the first
        failure (in input order) is raised and nothing is returned.
        """
        results: list = [None] * len(urls)
        errors: list = [None] * len(urls)

        with concurrent.futures.ThreadPoolExecutor(max_workers=min(self.MAX_WORKERS, len(urls) or 1)) as executor:
            futures = {executor.submit(self.get_json, url): idx for idx, url in enumerate(urls)}
            with tqdm.tqdm(total=len(urls), desc=Fore.GREEN + desc + Fore.RESET, unit="edition",
                           colour='green', leave=False, disable=not self.show_progress) as pbar:
                for future in concurrent.futures.as_completed(futures):
                    idx = futures[future]
                    try:
                        results[idx] = future.result()
                    except HidayahError as e:
                        errors[idx] = e
                    pbar.update(1)

        for error in errors:
            if error is not None:
                raise error
        return results
