#!/usr/bin/env python3

import logging
from typing import List, Optional

import requests

from ..config.manager import LocalizerConfig
from ..errors import MirrorListError
from .resolver import resolve_url, extract_urls, select_priority_urls

logger = logging.getLogger(__name__)

class MirrorListFetcher:
    def __init__(self, config: LocalizerConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def fetch(self, mirrorlist: str) -> bytes:
        """Download a mirrorlist document and return its raw body"""
        url = resolve_url(self.config, mirrorlist)
        logger.info(f"Fetching mirrorlist {url}")

        try:
            response = self.session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            raise MirrorListError(f"Failed to fetch mirrorlist {url}: {e}") from e

    def get_mirror_urls(self, mirrorlist: str) -> List[str]:
        """Fetch a mirrorlist and return its candidates in priority order"""
        urls = extract_urls(self.fetch(mirrorlist))
        logger.debug(f"Mirrorlist {mirrorlist} listed {len(urls)} URLs")
        return select_priority_urls(urls, self.config.priority_mirrors)

    def close(self) -> None:
        self.session.close()
