#!/usr/bin/env python3

import os
import glob
import logging
import configparser
from typing import List

from ..config.manager import LocalizerConfig
from ..errors import RepoFileError

logger = logging.getLogger(__name__)

REPO_FILE_PATTERN = "*.repo"

# A line break cannot occur in a section header, so no real section maps here
NO_DEFAULT_SECTION = "\n"

def new_repo_parser() -> configparser.ConfigParser:
    """INI parser that keeps key case and leaves $ and % untouched.

    [DEFAULT] is read as an ordinary section so its keys are not inherited
    by the repositories.
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False,
                                       default_section=NO_DEFAULT_SECTION)
    parser.optionxform = str
    return parser

class RepoStorage:
    def __init__(self, config: LocalizerConfig):
        self.config = config

    def list_repo_files(self) -> List[str]:
        """Return the .repo files of the source directory in name order"""
        pattern = os.path.join(self.config.repos_dir, REPO_FILE_PATTERN)
        paths = sorted(glob.glob(pattern))
        if not paths:
            logger.warning(f"No repository files matched {pattern}")
        return paths

    def ensure_directory_structure(self) -> str:
        """Create the destination directory"""
        try:
            os.makedirs(self.config.dest_path, mode=0o755, exist_ok=True)
        except OSError as e:
            raise RepoFileError(f"Failed to create directory {self.config.dest_path}: {e}") from e
        logger.debug(f"Ensured directory exists: {self.config.dest_path}")
        return self.config.dest_path

    def load(self, path: str) -> configparser.ConfigParser:
        parser = new_repo_parser()
        try:
            with open(path, 'r') as f:
                parser.read_file(f, source=path)
        except (OSError, UnicodeDecodeError, configparser.Error) as e:
            raise RepoFileError(f"Failed to read repository file {path}: {e}") from e
        return parser

    def save(self, parser: configparser.ConfigParser, filename: str) -> str:
        """Write parser to the destination directory, replacing any existing file"""
        output = os.path.join(self.config.dest_path, os.path.basename(filename))
        try:
            with open(output, 'w') as f:
                parser.write(f)
        except OSError as e:
            raise RepoFileError(f"Failed to write repository file {output}: {e}") from e
        logger.info(f"Wrote {output}")
        return output
