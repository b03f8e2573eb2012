"""Formatters for the account, chat lists, chat history and bulk deletes."""

import csv
import io

from claudeai_cli.formatters._table import _sanitize_str, _table, _trunc


def format_account_table(account):
    """Format an Account record as readable text."""
    lines = [
        f"Account: {account.display_name or account.full_name or '?'}",
        f"Name:    {account.full_name or '-'}",
        f"Email:   {account.email_address or '-'}",
        f"ID:      {account.uuid}",
        f"Org:     {account.organization_name or '-'} ({account.organization_uuid})",
    ]
    return "\n".join(lines)


def format_chats_table(chats):
    """Format a list of ChatSummary records; the index column is what commands take."""
    if not chats:
        return "No chats found."
    cols = [("Idx", 5), ("Name", 40), ("Updated", 26), ("UUID", 0)]
    rows = []
    for i, chat in enumerate(chats):
        rows.append(
            (
                str(i),
                _trunc(chat.name or "(untitled)", 40),
                (chat.updated_at or "-")[:26],
                chat.uuid,
            )
        )
    return _table(cols, rows, f"Total: {len(chats)} chats")


def format_chats_csv(chats):
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(["index", "name", "created_at", "updated_at", "uuid"])
    for i, chat in enumerate(chats):
        writer.writerow([i, chat.name, chat.created_at or "", chat.updated_at or "", chat.uuid])
    return buf.getvalue().rstrip()


def format_chat_detail(chat, max_messages=20):
    """Format a ChatDetail with its most recent messages."""
    lines = [
        f"Chat:     {chat.name or '(untitled)'}",
        f"UUID:     {chat.uuid}",
    ]
    if chat.created_at:
        lines.append(f"Created:  {chat.created_at}")
    if chat.updated_at:
        lines.append(f"Updated:  {chat.updated_at}")
    messages = chat.messages
    lines.append(f"Messages ({len(messages)}):")
    if len(messages) > max_messages:
        lines.append(f"  ... {len(messages) - max_messages} earlier messages")
        messages = messages[-max_messages:]
    for msg in messages:
        text = _sanitize_str(msg.text or "").strip().replace("\n", " ")
        lines.append(f"  [{msg.sender or '?'}] {_trunc(text, 200)}")
    return "\n".join(lines)


def format_bulk_delete(result):
    """Format a BulkDeleteResult."""
    total = len(result.deleted) + len(result.failed)
    lines = [f"Deleted {len(result.deleted)} of {total} chats."]
    for item in result.failed:
        lines.append(f"  FAILED {item['uuid']}: {item['error']}")
    return "\n".join(lines)
