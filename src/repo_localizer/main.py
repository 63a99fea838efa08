#!/usr/bin/env python3

import sys
import os
import argparse
import logging
from dataclasses import replace

from .config.manager import ConfigManager, print_usage
from .errors import LocalizerError
from .mirrors.fetcher import MirrorListFetcher
from .rewrite.rewriter import RepoFileRewriter
from .storage.manager import RepoStorage

def setup_logging(level: str = "INFO"):
    """Configure logging for the application"""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Determine log file path
    if os.geteuid() == 0:
        log_file = "/var/log/repo-localizer.log"
    else:
        log_file = os.path.expanduser("~/.local/log/repo-localizer.log")
        # Ensure the log directory exists
        os.makedirs(os.path.dirname(log_file), exist_ok=True)

    # stdout carries the sync commands, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )

def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser"""
    parser = argparse.ArgumentParser(
        description="Yum Repository Localizer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Rewrites $REPOSDIR/*.repo into $DEST with baseurl pointing at $BASEPATH and
prints one yums3sync command per rewritten repository.

Examples:
  %(prog)s                                    # Rewrite using the environment
  %(prog)s -u                                 # List the environment settings
  %(prog)s --config localizer.yaml            # Read settings from a YAML file
  %(prog)s --keep-going > sync.sh             # Skip broken files, save commands
        """
    )

    parser.add_argument(
        "--usage", "-u",
        action="store_true",
        help="Show the environment settings and exit"
    )

    parser.add_argument(
        "--config", "-c",
        help="Path to YAML settings file (environment overrides it)",
        default=None
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level"
    )

    parser.add_argument(
        "--keep-going", "-k",
        action="store_true",
        help="Continue with the remaining files when one fails"
    )

    return parser

def main(argv=None) -> int:
    """Main entry point"""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.usage:
        print_usage()
        return 0

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    fetcher = None
    try:
        config = ConfigManager(args.config).load_config()
        if args.keep_going:
            config = replace(config, continue_on_error=True)

        storage = RepoStorage(config)
        fetcher = MirrorListFetcher(config)
        rewriter = RepoFileRewriter(config, storage, fetcher)

        summary = rewriter.run()
        if not summary.ok:
            logger.error(f"{len(summary.failures)} repository files could not be rewritten: "
                         f"{', '.join(summary.failures)}")
            return 1
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except LocalizerError as e:
        logger.error(str(e))
        if args.log_level == "DEBUG":
            import traceback
            traceback.print_exc()
        return 1

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args.log_level == "DEBUG":
            import traceback
            traceback.print_exc()
        return 1

    finally:
        if fetcher is not None:
            fetcher.close()

if __name__ == "__main__":
    sys.exit(main())
