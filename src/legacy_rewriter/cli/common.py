import logging

from rich.logging import RichHandler

from legacy_rewriter.core.config import load_config


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else load_config().log_level
    logging.basicConfig(level=level, format="%(message)s", handlers=[RichHandler(show_path=False)], force=True)
