#!/usr/bin/env python3

import posixpath

from ..config.manager import LocalizerConfig
from .resolver import resolve_url

def build_path(config: LocalizerConfig, section: str, url: str) -> str:
    """Mirror path of a repository: prefix/section/releasever[/arch]

    The architecture directory is only added when the source URL is
    architecture specific.
    """
    parts = [config.prefix, section, config.release_ver]
    if config.arch in resolve_url(config, url):
        parts.append(config.arch)

    path = posixpath.normpath(posixpath.join(*parts))
    return resolve_url(config, path)

def build_baseurl(config: LocalizerConfig, section: str, url: str) -> str:
    base = config.base_path.lstrip("/")
    return f"{base}/{build_path(config, section, url)}"
