# src/reqlog/core/logging/
# ├─ __init__.py            # public API: setup_logging, make_dict_config, stop_queue_logging
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings) + queue mode
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # RedactFilter
# └─ handlers.py            # handler config factories (console / file / error)


from .builder import setup_logging, make_dict_config, stop_queue_logging, get_queue_stats
from .filters import RedactFilter
from .formatters import JsonFormatter, ColorFormatter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "stop_queue_logging",
    "get_queue_stats",
    "RedactFilter",
    "JsonFormatter",
    "ColorFormatter",
]
