#!/usr/bin/env python3

import random
from typing import Callable, Sequence

from ..config.manager import LocalizerConfig
from ..mirrors.paths import build_path
from ..mirrors.resolver import resolve_url

SYNC_COMMAND = "yums3sync --source '{source}' --bucket '{bucket}' --prefix '{prefix}'"

Chooser = Callable[[Sequence[str]], str]

def format_sync_command(config: LocalizerConfig, section: str, url: str) -> str:
    return SYNC_COMMAND.format(
        source=resolve_url(config, url),
        bucket=config.bucket,
        prefix=build_path(config, section, url),
    )

def make_sync_command(config: LocalizerConfig, section: str, urls: Sequence[str],
                      chooser: Chooser = random.choice) -> str:
    """Build the sync command for one mirror picked from urls"""
    if not urls:
        raise ValueError(f"No mirror URLs to sync section {section} from")
    return format_sync_command(config, section, chooser(urls))
