"""Structlog processors shaping log entries.

Usage:
    from infrastructure.logging.formatters import add_app_info, summarize_containers
"""

from typing import Any

EventDict = dict[str, Any]


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Processor stamping every entry with the application name and version."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


def summarize_containers(max_items: int = 20):
    """Processor replacing large dicts and lists by a size summary.

    Whole translation documents occasionally end up as log values; only
    their size is kept once they exceed ``max_items`` entries.
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if isinstance(value, dict) and len(value) > max_items:
                event_dict[key] = f"<dict with {len(value)} keys>"
            elif isinstance(value, (list, tuple)) and len(value) > max_items:
                event_dict[key] = f"<{type(value).__name__} with {len(value)} items>"
        return event_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Processor cutting string values longer than ``max_length``."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    f"{value[:max_length]}...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
