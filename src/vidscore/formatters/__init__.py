"""Output formatters for vidscore."""

from .default import format_default, format_summary
from .full import format_full, format_record_full
from .history import format_history
from .json import format_json, format_json_list, to_dict
from .quiet import format_quiet, format_quiet_list

__all__ = [
    "format_default",
    "format_summary",
    "format_full",
    "format_record_full",
    "format_history",
    "format_json",
    "format_json_list",
    "format_quiet",
    "format_quiet_list",
    "to_dict",
]
