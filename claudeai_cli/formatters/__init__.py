"""Output formatting package for claudeai-cli.

Re-exports all public names so consumers can do:
    from claudeai_cli.formatters import format_chats_table
"""

from claudeai_cli.formatters._chats import (
    format_account_table,
    format_bulk_delete,
    format_chat_detail,
    format_chats_csv,
    format_chats_table,
)
from claudeai_cli.formatters._core import (
    mutation_response,
    output,
    pretty_print,
)
from claudeai_cli.formatters._table import (
    _CONTROL_RE,
    _sanitize_str,
    _table,
    _trunc,
)

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_account_table",
    "format_bulk_delete",
    "format_chat_detail",
    "format_chats_csv",
    "format_chats_table",
    "mutation_response",
    "output",
    "pretty_print",
]
