"""
claudeai-cli: command-line access to claude.ai chats and account
"""

import argparse
import http.client
import json
import logging
import sys

from claudeai_cli import config
from claudeai_cli.api import _sanitize_error
from claudeai_cli.client import ClaudeClient
from claudeai_cli.commands import (
    cmd_account,
    cmd_chat,
    cmd_chats,
    cmd_create,
    cmd_delete,
    cmd_delete_all,
    cmd_logout,
    cmd_rename,
    cmd_send,
    cmd_title,
    cmd_update_account,
)
from claudeai_cli.exceptions import CliError, EmptyResultWarning, HTTPError, SetupError
from claudeai_cli.log import get_logger, setup_logging

HELP_TEXT = """\
Usage: claudeai-cli <command> [args...]

Global flags:
  --format table          Output as readable text instead of JSON (default: json)
  --format csv            Output chats as CSV (chats command only)
  --dry-run               Preview deletions without executing them
  --quiet, -q             Suppress warnings and info logs
  --verbose, -v           Enable debug and HTTP request logging
  --version               Show version number

Chats are addressed by INDEX: the zero-based position shown by `chats`.
Indexes shift after create/delete, so re-list before reusing one.

Commands:
  account                 - Show account info
  update-account          - Change account names
    --display-name <text>   New display name (required)
    --full-name <text>      New full name (required)
  logout                  - End the web session
  chats                   - List all chats
  chat <index>            - Show a chat and its messages
  create [name]           - Create a new empty chat
  rename <index> [name]   - Rename a chat (empty name clears it)
  delete <index> --confirm
                          - Permanently delete a chat
  delete-all --confirm    - Permanently delete every chat
  send <index> <message>  - Send a message and print the reply
    --attach <path>         Attach a text file (repeatable)
  title <index> <hint>    - Let the server generate and apply a chat title
  version                 - Show version number

Configuration (.env or environment):
  CLAUDEAI_SESSION_KEY    Value of the claude.ai 'sessionKey' cookie
  CLAUDEAI_MODEL          Completion model (default: claude-2.1)
  CLAUDEAI_TIMEZONE       IANA timezone sent with messages
"""

# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --format works after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, dry_run, quiet, verbose, remaining_argv).
    Handles --version directly.
    """
    fmt = "json"
    dry_run = False
    quiet = False
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        if argv[i] == "--version":
            print(f"claudeai-cli {config.VERSION}")
            sys.exit(0)
        elif argv[i] == "--dry-run":
            dry_run = True
            i += 1
            continue
        elif argv[i] in ("--quiet", "-q"):
            quiet = True
            i += 1
            continue
        elif argv[i] in ("--verbose", "-v"):
            verbose = True
            i += 1
            continue
        elif argv[i] == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in ("json", "table", "csv"):
                raise CliError(f"[ERROR] Invalid format '{fmt}'. Use: json, table, csv")
            i += 2
            continue
        else:
            remaining.append(argv[i])
        i += 1
    if quiet and verbose:
        raise CliError("[ERROR] --quiet and --verbose are mutually exclusive.")
    return fmt, dry_run, quiet, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def _chat_index(value):
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer chat index") from exc


def build_parser():
    parser = _SubcommandParser(
        prog="claudeai-cli",
        description="Command-line access to claude.ai chats and account",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    # --- account ---
    sub.add_parser("account").set_defaults(func=cmd_account)

    p = sub.add_parser("update-account")
    p.add_argument("--display-name", required=True, dest="display_name")
    p.add_argument("--full-name", required=True, dest="full_name")
    p.set_defaults(func=cmd_update_account)

    sub.add_parser("logout").set_defaults(func=cmd_logout)

    # --- chats / chat ---
    sub.add_parser("chats").set_defaults(func=cmd_chats)

    p = sub.add_parser("chat")
    p.add_argument("index", type=_chat_index)
    p.set_defaults(func=cmd_chat)

    # --- create / rename ---
    p = sub.add_parser("create")
    p.add_argument("name", nargs="?", default="")
    p.set_defaults(func=cmd_create)

    p = sub.add_parser("rename")
    p.add_argument("index", type=_chat_index)
    p.add_argument("name", nargs="?", default="")
    p.set_defaults(func=cmd_rename)

    # --- delete / delete-all ---
    p = sub.add_parser("delete")
    p.add_argument("index", type=_chat_index)
    p.add_argument("--confirm", action="store_true")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("delete-all")
    p.add_argument("--confirm", action="store_true")
    p.set_defaults(func=cmd_delete_all)

    # --- send / title ---
    p = sub.add_parser("send")
    p.add_argument("index", type=_chat_index)
    p.add_argument("message")
    p.add_argument("--attach", action="append", metavar="PATH")
    p.set_defaults(func=cmd_send)

    p = sub.add_parser("title")
    p.add_argument("index", type=_chat_index)
    p.add_argument("hint")
    p.set_defaults(func=cmd_title)

    # --- version (bare word) ---
    sub.add_parser("version").set_defaults(func=None)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

NO_SESSION_COMMANDS = {"version"}
CONFIRM_COMMANDS = {"delete", "delete-all"}


def _error_type_from_message(message):
    if message.startswith("[SESSION_EXPIRED]"):
        return "session_expired"
    if message.startswith("[SETUP_NEEDED]"):
        return "setup_needed"
    if message.startswith("[WARN]"):
        return "warning"
    if message.startswith("[ERROR]"):
        return "error"
    return "cli_error"


def _emit_cli_error(err, fmt):
    msg = str(err)
    if fmt == "json":
        payload = {
            "ok": False,
            "schema_version": config.CONTRACT_SCHEMA_VERSION,
            "error": {
                "type": _error_type_from_message(msg),
                "message": msg,
                "exit_code": getattr(err, "exit_code", 1),
            },
        }
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    print(msg, file=sys.stderr)


def _transport_error_message(err):
    """Render an HTTP or connection failure for the terminal."""
    if isinstance(err, HTTPError):
        if err.code in (401, 403):
            return (
                f"[SESSION_EXPIRED] claude.ai rejected the session (HTTP {err.code}). "
                "Copy a fresh 'sessionKey' cookie from your browser into "
                "CLAUDEAI_SESSION_KEY."
            )
        msg = f"[ERROR] HTTP {err.code}: {err.reason}"
        detail = _sanitize_error(err.body)
        return f"{msg}\n{detail}" if detail else msg
    reason = getattr(err, "reason", err)
    return f"[ERROR] Connection failed: {reason}"


def _check_session():
    if not config.SESSION_KEY:
        raise SetupError(
            "[SETUP_NEEDED] CLAUDEAI_SESSION_KEY is not set.\n"
            "  Add it to .env or the environment (the 'sessionKey' cookie from claude.ai)."
        )


def main():
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    if len(sys.argv) < 2:
        print(HELP_TEXT)
        sys.exit(0)

    fmt = "json"
    log = get_logger("cli")
    try:
        # Extract global flags from anywhere in argv
        fmt, dry_run, quiet, verbose, remaining_argv = _extract_global_flags(sys.argv[1:])
        config.RUNTIME_DRY_RUN = dry_run
        config.RUNTIME_QUIET = quiet
        config.RUNTIME_VERBOSE = verbose
        if verbose:
            config.HTTP_LOG_ENABLED = True
            setup_logging(logging.DEBUG)
        elif quiet:
            setup_logging(logging.ERROR)
        else:
            setup_logging()

        if not remaining_argv:
            print(HELP_TEXT)
            sys.exit(0)

        parser = build_parser()
        ns = parser.parse_args(remaining_argv)
        ns.format = fmt  # inject global format flag

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        cmd = ns.command

        if cmd == "version":
            print(f"claudeai-cli {config.VERSION}")
            sys.exit(0)

        if cmd in CONFIRM_COMMANDS and not ns.confirm and not dry_run:
            raise CliError(
                f"[ERROR] Permanent deletion requires --confirm flag.\n"
                f"Preview first with: claudeai-cli {cmd} --dry-run"
            )

        if cmd not in NO_SESSION_COMMANDS:
            _check_session()

        handler = getattr(ns, "func", None)
        if not handler:
            raise CliError(f"[ERROR] Unknown command: {cmd}")
        ns.client = ClaudeClient()
        handler(ns)

    except EmptyResultWarning as e:
        log.warning("%s", e)
        sys.exit(e.exit_code)
    except CliError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)
    except (HTTPError, OSError, http.client.HTTPException) as e:
        _emit_cli_error(CliError(_transport_error_message(e)), fmt)
        sys.exit(CliError.exit_code)


if __name__ == "__main__":
    main()
