#!/usr/bin/env python3

"""Exceptions raised while localizing repository files."""


class LocalizerError(Exception):
    """Base class for all repo-localizer failures."""


class ConfigError(LocalizerError):
    """Settings could not be loaded from the YAML file or the environment."""


class RepoFileError(LocalizerError):
    """A .repo file could not be listed, parsed or written."""


class MirrorListError(LocalizerError):
    """A mirrorlist could not be fetched."""
