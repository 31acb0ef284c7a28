"""
Command-line entry point for label-sorter.
Loads configuration, prepares the working directory and runs the web server.
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from label_sorter.api.logging import setup_logging
from label_sorter.api.main import create_app
from label_sorter.config import load_config
from label_sorter.errors import ConfigError
from label_sorter.lifecycle import LifecycleController

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Sort a folder of images into label subfolders from the browser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve ./images with labels from ./labels.txt on port 18081
  label-sorter

  # Custom folders and page size
  label-sorter --images-dir ~/Pictures/inbox --labels cats_dogs.txt --per-page 24

  # Settings from a YAML file, port overridden
  label-sorter --config label_sorter.yaml --port 9000

Press Ctrl+C to stop; labeled folders are packed into the archive on exit.
        """
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        '--images-dir', '-i',
        type=str,
        help="Working directory holding the images (default: images)"
    )
    parser.add_argument(
        '--labels', '-l',
        dest='labels_file',
        type=str,
        help="Label definitions, one per line (default: labels.txt)"
    )
    parser.add_argument(
        '--archive', '-o',
        dest='archive_path',
        type=str,
        help="Zip file written on shutdown (default: result.zip)"
    )
    parser.add_argument(
        '--per-page', '-n',
        dest='items_per_page',
        type=int,
        help="Images per page (default: 10)"
    )
    parser.add_argument('--host', type=str, help="Bind address (default: 0.0.0.0)")
    parser.add_argument('--port', '-p', type=int, help="Port to listen on (default: 18081)")
    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help="Logging level (default: INFO)"
    )
    parser.add_argument('--log-dir', type=str, help="Base folder for run logs (default: logs)")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    overrides = {key: value for key, value in vars(args).items() if key != 'config'}

    try:
        config = load_config(args.config, overrides)
    except ConfigError as e:
        parser.error(str(e))

    log_file = setup_logging(config)
    logger.info(f"Logging to {log_file}")

    controller = LifecycleController(config)
    try:
        controller.start()
    except (ConfigError, OSError) as e:
        logger.critical(f"Startup failed: {e}")
        sys.exit(1)

    app = create_app(controller=controller)

    print(f"Server starting on http://localhost:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == '__main__':
    main()
