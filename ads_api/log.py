# ads_api/log.py
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from .config import Settings

HANDLER_NAME = "ads_api"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers in production."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(settings: Settings) -> None:
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if settings.is_production:
        handler.setFormatter(JsonFormatter())
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
        ))
        level = logging.DEBUG

    root = logging.getLogger()
    # replace only our own handler so repeated setup does not duplicate lines
    for h in list(root.handlers):
        if h.get_name() == HANDLER_NAME:
            root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)
    # httpx logs full request URLs, which embed the bot token
    logging.getLogger("httpx").setLevel(logging.WARNING)
