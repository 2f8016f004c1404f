"""Command-line front door for chanterm.

Parses CLI options, resolves config and the workspace, and opens the service.
Then dispatches into the interactive client or prints the channel list.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import logging_setup
from .channels import build_channel_viewport
from .chat import ChatPane
from .layout import compute_layout
from .render import render_channel_list
from .runtime import run_client
from .runtime.config import ClientConfig, load_client_config
from .runtime.session import ClientSession
from .runtime.state import AppState
from .service import ServiceError, WorkspaceChatService
from .service.base import ChatService
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)


def channel_labels(service: ChatService) -> tuple[str, ...]:
    """Return sidebar labels with presence applied, without touching read marks."""
    layout = compute_layout(80, 24)
    viewport = build_channel_viewport(
        service.channels(),
        window_top=layout.list_window_top,
        window_bottom=layout.list_window_bottom,
    )
    session = ClientSession(service, AppState(viewport=viewport, chat=ChatPane(), layout=layout))
    session.load_presence()
    return viewport.store.labels


def _resolve_workspace(arg: str | None, config: ClientConfig) -> Path:
    if arg is not None:
        return Path(arg).expanduser()
    if config.workspace is not None:
        return config.workspace
    raise SystemExit("No workspace given. Pass a workspace file or set \"workspace\" in the config.")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the client on a workspace file.

    Without a tty on stdin/stdout, or with ``--list``, the channel list is
    printed instead of starting the interactive UI.
    """
    parser = argparse.ArgumentParser(description="Chat in your terminal with a scrollable channel list.")
    parser.add_argument("workspace", nargs="?", default=None, help="Workspace JSON file.")
    parser.add_argument("--config", metavar="PATH", default=None, help="Config file to use instead of the default.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--list", action="store_true", help="Print channel labels and exit.")
    args = parser.parse_args(argv)

    config_path = Path(args.config).expanduser() if args.config is not None else None
    config = load_client_config(config_path)
    logging_setup.configure(args.log_level or config.log_level)

    workspace = _resolve_workspace(args.workspace, config)
    if not workspace.exists():
        raise SystemExit(f"Workspace not found: {workspace}")
    try:
        service = WorkspaceChatService(workspace)
    except ServiceError as exc:
        logger.error("cannot open workspace: %s", exc)
        raise SystemExit(str(exc)) from exc

    if args.list or not (os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())):
        sys.stdout.write(render_channel_list(channel_labels(service)))
        return

    run_client(service, config, args.theme)


if __name__ == "__main__":
    main()
