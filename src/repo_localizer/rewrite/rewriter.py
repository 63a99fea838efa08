#!/usr/bin/env python3

import os
import random
import logging
import configparser
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from ..config.manager import LocalizerConfig
from ..errors import MirrorListError, RepoFileError
from ..mirrors.fetcher import MirrorListFetcher
from ..mirrors.paths import build_baseurl
from ..storage.manager import RepoStorage
from ..sync.commands import Chooser, format_sync_command

logger = logging.getLogger(__name__)

@dataclass
class SectionResult:
    section: str
    candidate: str  # source used for the baseurl rewrite
    sync_source: Optional[str] = None
    baseurl: Optional[str] = None
    sync_command: Optional[str] = None

@dataclass
class RunSummary:
    written: List[str] = field(default_factory=list)
    commands: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

def is_ignored(config: LocalizerConfig, name: str) -> bool:
    return any(prefix and name.startswith(prefix) for prefix in config.ignores)

class RepoFileRewriter:
    def __init__(self, config: LocalizerConfig, storage: RepoStorage, fetcher: MirrorListFetcher,
                 chooser: Optional[Chooser] = None, emit: Callable[[str], None] = print):
        self.config = config
        self.storage = storage
        self.fetcher = fetcher
        self.chooser = chooser or random.choice
        self.emit = emit

    def get_candidates(self, section: configparser.SectionProxy) -> List[str]:
        mirrorlist = section.get("mirrorlist", "").strip()
        if mirrorlist:
            return self.fetcher.get_mirror_urls(mirrorlist)

        return [section.get("baseurl", "").strip()]

    def rewrite_section(self, name: str, section: configparser.SectionProxy) -> Optional[SectionResult]:
        """Point one section at the mirror and drop its mirrorlist.

        Returns None when the mirrorlist offered no usable URL.
        """
        urls = self.get_candidates(section)
        section.pop("mirrorlist", None)

        if not urls:
            logger.warning(f"No mirror URLs found for section {name}, leaving baseurl unchanged")
            return None

        if self.config.consistent_pick:
            # blank mirrorlist lines would leave the section without any URL
            usable = [url for url in urls if url]
            sync_source = self.chooser(usable) if usable else urls[0]
            candidate = sync_source
        else:
            sync_source = self.chooser(urls)
            candidate = urls[0]
        if candidate != sync_source:
            logger.warning(f"Section {name}: syncing from {sync_source} but baseurl is built from {candidate}")

        result = SectionResult(section=name, candidate=candidate, sync_source=sync_source)
        if not candidate:
            logger.debug(f"Section {name} has no baseurl, nothing to rewrite")
            return result

        result.sync_command = format_sync_command(self.config, name, sync_source)
        result.baseurl = build_baseurl(self.config, name, candidate)
        section["baseurl"] = result.baseurl
        self.emit(result.sync_command)
        return result

    def process_file(self, path: str) -> List[SectionResult]:
        """Rewrite every section of one .repo file into the destination directory"""
        logger.info(f"Processing {path}")
        parser = self.storage.load(path)

        results = []
        for name in parser.sections():
            if is_ignored(self.config, name):
                logger.debug(f"Ignoring section {name}")
                continue
            result = self.rewrite_section(name, parser[name])
            if result is not None:
                results.append(result)

        self.storage.save(parser, os.path.basename(path))
        return results

    def run(self, paths: Optional[Sequence[str]] = None) -> RunSummary:
        if paths is None:
            paths = self.storage.list_repo_files()
        self.storage.ensure_directory_structure()

        summary = RunSummary()
        for path in paths:
            try:
                results = self.process_file(path)
            except (RepoFileError, MirrorListError) as e:
                if not self.config.continue_on_error:
                    raise
                logger.error(f"Skipping {path}: {e}")
                summary.failures[path] = str(e)
                continue

            summary.written.append(os.path.join(self.config.dest_path, os.path.basename(path)))
            summary.commands.extend(r.sync_command for r in results if r.sync_command)

        logger.info(f"Rewrote {len(summary.written)} repository files, {len(summary.failures)} failed")
        return summary
