#!/usr/bin/env python3

"""
Mirror URL resolution.

Turns yum URL templates into concrete URLs, pulls candidate URLs out of
mirrorlist documents (plain lists or metalink XML) and orders them by how
close the mirror is to the bucket region.
"""

import re
import logging
from typing import List, Sequence, Union

from ..config.manager import LocalizerConfig, DEFAULT_PRIORITY_MIRRORS

logger = logging.getLogger(__name__)

PRIORITY_MIRRORS = tuple(DEFAULT_PRIORITY_MIRRORS)

S3_MIRROR_RE = re.compile(r'http.+s3-mirror-ap-northeast-1')
COUNTRY_MARKER = ".jp/"

XML_MARKER = "<?xml version="
JP_LOCATION_MARKER = 'location="JP"'
XML_JP_URL_RE = re.compile(r'location="JP"[^>]*>(https?://.+)</url>')
XML_URL_RE = re.compile(r'location="[^"]+"[^>]*>(https?://.+)</url>')

REPOMD_SUFFIX = "/repodata/repomd.xml"

def resolve_url(config: LocalizerConfig, url: str) -> str:
    """Substitute yum variables and drop the repomd.xml suffix"""
    url = url.replace("$basearch", config.arch)
    url = url.replace("$releasever", config.release_ver)
    url = url.replace("$infra", "")
    return url.replace(REPOMD_SUFFIX, "")

def _grep(lines: List[str], pattern) -> List[str]:
    urls = []
    for line in lines:
        match = pattern.search(line)
        if match:
            urls.append(match.group(1))
    return urls

def extract_urls(body: Union[bytes, str]) -> List[str]:
    """Return the candidate URLs of a mirrorlist document in document order.

    Metalink documents yield the <url> entries, restricted to JP locations
    when the document has any. Plain lists yield every non-comment line,
    blank lines included.
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")

    lines = body.split("\n")
    if any(XML_MARKER in line for line in lines):
        if any(JP_LOCATION_MARKER in line for line in lines):
            return _grep(lines, XML_JP_URL_RE)
        return _grep(lines, XML_URL_RE)

    return [line for line in lines if not line.startswith("#")]

def select_priority_urls(urls: Sequence[str], priority_mirrors: Sequence[str] = PRIORITY_MIRRORS) -> List[str]:
    """Keep the best tier of candidates: S3 region mirror, .jp/ hosts, priority mirrors.

    Falls back to the full list when no tier matches.
    """
    selected = [url for url in urls if S3_MIRROR_RE.search(url)]
    if selected:
        logger.debug(f"Using {len(selected)} regional S3 mirrors")
        return selected

    selected = [url for url in urls if COUNTRY_MARKER in url]
    if selected:
        logger.debug(f"Using {len(selected)} country mirrors")
        return selected

    selected = [url for url in urls if any(url.startswith(mirror) for mirror in priority_mirrors)]
    if selected:
        logger.debug(f"Using {len(selected)} priority mirrors")
        return selected

    return list(urls)
