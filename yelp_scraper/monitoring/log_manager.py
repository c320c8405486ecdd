import json
import logging
from pathlib import Path
from datetime import datetime
from typing import Dict, Any

CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'

# Third-party loggers held at WARNING regardless of the run level
QUIET_LOGGERS = ('asyncio',)


class LogManager:
    """
    Process-wide logging for a scraper run

    Installs three root handlers: console output, a daily scraper log with
    everything at DEBUG and above, and a daily failures log with warnings
    and errors only (per-attempt retry warnings and final request failures).
    """

    def __init__(self, log_dir: str = "crawl_data/logs", log_level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.day = datetime.now().strftime('%Y%m%d')

        self.setup_logging(log_level)

    def _file_handler(self, prefix: str, level: int) -> logging.FileHandler:
        handler = logging.FileHandler(self.log_dir / f"{prefix}_{self.day}.log", encoding='utf-8')
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
        return handler

    def setup_logging(self, log_level: str):
        """Replace root handlers with the run's console and file handlers"""
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level.upper()))
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

        root_logger.addHandler(self._file_handler('scraper', logging.DEBUG))
        root_logger.addHandler(self._file_handler('errors', logging.WARNING))

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    def export_metrics_json(self, metrics_data: Dict[str, Any], filename: str = None) -> Path:
        """Write a metrics report next to the logs"""
        if filename is None:
            filename = f"metrics_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

        export_path = self.log_dir / filename
        with open(export_path, 'w', encoding='utf-8') as f:
            json.dump(metrics_data, f, indent=2, default=str)

        logging.getLogger(__name__).info(f"📁 Metrics exported to {export_path}")
        return export_path
