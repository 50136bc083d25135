import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "draft_values.log"


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_to_file: bool = True,
    module_levels: Optional[Dict[str, str]] = None,
) -> None:
    """Configure logging for the draft value engine.

    Args:
        log_level: Console level (e.g. "INFO", "DEBUG").
        log_dir: Where the rotating log file goes. Defaults to ``logs/``.
        log_to_file: Disable to log to the console only.
        module_levels: Optional per-logger overrides,
            e.g. ``{"src.vona": "DEBUG"}``.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(logging.DEBUG if log_to_file else level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)

        # File handler with rotation (5MB max, keep 3 backups)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILE_NAME, maxBytes=5 * 1024 * 1024, backupCount=3
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Console handler on stderr so stdout stays clean for the CLI result
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for name, module_level in (module_levels or {}).items():
        logging.getLogger(name).setLevel(
            getattr(logging, module_level.upper(), logging.INFO)
        )

    logging.getLogger(__name__).info(
        "Logging initialized (level=%s, file=%s)",
        log_level, log_dir / LOG_FILE_NAME if log_to_file else None,
    )
