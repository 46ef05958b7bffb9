"""
Overpass API client

Handles communication with Overpass API including:
- Rate limiting
- Retry logic with backoff
- Server rotation on gateway errors
"""

import time
import requests
from typing import Any, Dict, List, Optional
from loguru import logger

from ...config import APIConfig, get_config


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.config = api_config or get_config().api
        self.urls = list(self.config.overpass_urls)
        self._url_index = 0
        self._last_request_time = 0.0
        self.request_count = 0

    @property
    def current_url(self) -> str:
        return self.urls[self._url_index]

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self.config.min_request_interval:
            time.sleep(self.config.min_request_interval - elapsed)
        self._last_request_time = time.time()

    def _switch_server(self):
        self._url_index = (self._url_index + 1) % len(self.urls)
        logger.info(f"Switching to Overpass server: {self.current_url}")

    def query(self, query: str) -> List[Dict[str, Any]]:
        """
        Execute Overpass API query with retry logic

        Args:
            query: Overpass QL query string

        Returns:
            List of elements from the Overpass response

        Raises:
            RuntimeError: If query fails after all retries
        """
        self._rate_limit()

        headers = {
            "User-Agent": self.config.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }
        retries = self.config.max_retries
        last_error = None

        for attempt in range(1, retries + 1):
            self.request_count += 1
            logger.info(f"Querying Overpass API (attempt {attempt}/{retries}) at {self.current_url}")
            try:
                response = requests.post(
                    self.current_url,
                    data={"data": query},
                    headers=headers,
                    timeout=self.config.request_timeout
                )

                if response.status_code == 429:
                    wait_time = min(self.config.retry_delay * 2 ** (attempt - 1), self.config.max_backoff)
                    logger.warning(f"Rate limited (429). Waiting {wait_time}s before retry...")
                    last_error = RuntimeError("HTTP 429 Too Many Requests")
                    if attempt < retries:
                        time.sleep(wait_time)
                    continue

                if response.status_code in (502, 504):
                    logger.warning(f"Gateway error ({response.status_code}). Switching server...")
                    last_error = RuntimeError(f"HTTP {response.status_code}")
                    self._switch_server()
                    if attempt < retries:
                        time.sleep(self.config.retry_delay * attempt)
                    continue

                response.raise_for_status()
                elements = response.json().get("elements", [])
                logger.info(f"Fetched {len(elements)} elements")
                return elements

            except (requests.exceptions.RequestException, ValueError) as e:
                last_error = e
                logger.warning(f"Overpass request failed (attempt {attempt}/{retries}): {e}")
                if attempt < retries:
                    time.sleep(self.config.retry_delay * attempt)

        logger.error(f"Overpass API failed after {retries} attempts: {last_error}")
        raise RuntimeError(f"Overpass API failed after {retries} attempts: {last_error}")
