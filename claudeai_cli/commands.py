"""
Command implementations for claudeai-cli.
Each cmd_*() function receives an argparse.Namespace and handles one CLI command.

Business logic lives in client.py (ClaudeClient). These thin wrappers
handle argparse → keyword args, format selection, and formatter dispatch.
cli.main() puts the session's ClaudeClient on ``ns.client``.
"""

import json

from claudeai_cli import config
from claudeai_cli.exceptions import CliError, EmptyResultWarning
from claudeai_cli.formatters import (
    format_account_table,
    format_bulk_delete,
    format_chat_detail,
    format_chats_csv,
    format_chats_table,
    mutation_response,
    output,
)
from claudeai_cli.models import Attachment

# ---------------------------------------------------------------------------
# Account commands
# ---------------------------------------------------------------------------


def cmd_account(ns):
    output(ns.client.get_account(), format_account_table, ns.format)


def cmd_update_account(ns):
    result = ns.client.update_account(display_name=ns.display_name, full_name=ns.full_name)
    mutation_response("Account updated", details=ns.display_name, data=result, fmt=ns.format)


def cmd_logout(ns):
    ns.client.logout()
    mutation_response("Logged out", fmt=ns.format)


# ---------------------------------------------------------------------------
# Chat commands
# ---------------------------------------------------------------------------


def cmd_chats(ns):
    output(ns.client.list_chats(), format_chats_table, ns.format, format_chats_csv)


def cmd_chat(ns):
    output(ns.client.get_chat(ns.index), format_chat_detail, ns.format)


def cmd_create(ns):
    chat = ns.client.create_chat(ns.name or "")
    mutation_response("Created", chat.uuid, details=chat.name or None, data=chat, fmt=ns.format)


def cmd_rename(ns):
    chat = ns.client.rename_chat(ns.index, ns.name or "")
    mutation_response("Renamed", chat.uuid, details=chat.name or "(cleared)", fmt=ns.format)


def cmd_delete(ns):
    if config.RUNTIME_DRY_RUN:
        chat = ns.client.resolve_chat(ns.index)
        mutation_response(
            "[DRY-RUN] Would delete", chat.uuid, details=chat.name or None, fmt=ns.format
        )
        return
    chat = ns.client.delete_chat(ns.index)
    mutation_response("Deleted", chat.uuid, details=chat.name or None, fmt=ns.format)


def cmd_delete_all(ns):
    if config.RUNTIME_DRY_RUN:
        chats = ns.client.list_chats()
        if not chats:
            raise EmptyResultWarning("[WARN] No chats found.")
        mutation_response(
            "[DRY-RUN] Would delete", details=f"{len(chats)} chat(s)", fmt=ns.format
        )
        return
    result = ns.client.delete_all_chats()
    output(result, format_bulk_delete, ns.format)
    if not result.ok:
        raise CliError(
            f"[ERROR] {len(result.failed)} of "
            f"{len(result.failed) + len(result.deleted)} chat deletions failed."
        )


# ---------------------------------------------------------------------------
# Message commands
# ---------------------------------------------------------------------------


def cmd_send(ns):
    attachments = [Attachment.from_file(path) for path in ns.attach or []]
    reply = ns.client.send_message(ns.index, ns.message, attachments=attachments)
    if ns.format == "table":
        print(reply)
        return
    print(json.dumps({"chat_index": ns.index, "reply": reply}, indent=2, ensure_ascii=False))


def cmd_title(ns):
    title = ns.client.generate_chat_title(ns.index, ns.hint)
    if ns.format == "table":
        print(title)
        return
    print(json.dumps({"chat_index": ns.index, "title": title}, indent=2, ensure_ascii=False))
