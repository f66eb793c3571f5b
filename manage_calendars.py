#!/usr/bin/env python3
"""
Calendar Permission Manager - manage who can see and edit mailbox calendars.

Signs in an administrator against Microsoft Graph, then offers menus to view,
add, modify and remove calendar permissions on any mailbox in the tenant.
"""

import argparse
import sys

from calperm import APP_NAME, __version__
from calperm.app import EXIT_FAILURE, EXIT_OK, CalendarApp
from calperm.config import COLOR_MODES, AppSettings
from calperm.core.logger import configure_logging, get_logger
from calperm.mailbox import DeviceCodeAuth, DeviceCodeAuthConfig, GraphMailboxService
from calperm.ui import UIContext
from calperm.ui.primitives import Colors
from calperm.ui.widgets import InputPrompt, ValidationKind

logger = get_logger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{APP_NAME} - view and change calendar sharing permissions"
    )
    parser.add_argument(
        "admin",
        nargs="?",
        help="Admin account to sign in with (prompted for if omitted)"
    )
    parser.add_argument(
        "--admin",
        dest="admin_option",
        metavar="ADMIN",
        help="Same as the positional argument"
    )
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        help="Force a colour mode instead of detecting the terminal"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def prompt_admin(ctx) -> str:
    """Ask for the admin account; empty string if cancelled."""
    result = InputPrompt(
        prompt="Admin account",
        title="Sign in",
        validation=ValidationKind.EMAIL,
        help_text="The administrator account used to manage calendars",
        show_status=False,
    ).run(ctx)
    return result.value if result.ok else ""


def main(argv=None) -> int:
    """Entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    settings = AppSettings.load()
    if args.color:
        settings.color_mode = args.color
    configure_logging(settings.resolved_log_dir, settings.log_level)
    logger.info(f"{APP_NAME} {__version__} starting")

    ctx = UIContext.create(settings)

    admin = args.admin_option or args.admin or prompt_admin(ctx)
    if not admin:
        return EXIT_OK

    auth = DeviceCodeAuth(
        DeviceCodeAuthConfig(tenant_id=settings.tenant_id, client_id=settings.client_id),
        on_prompt=lambda message: ctx.renderer.line((message, "Yellow"), spaces=2, lines_before=1),
        access_token=settings.access_token,
    )
    service = GraphMailboxService(auth)
    app = CalendarApp(ctx, service, admin, notify_by_default=settings.notify_by_default)
    return app.run()


def run(argv=None) -> int:
    """Console entry point: main() plus interrupt and crash handling."""
    try:
        return main(argv)
    except KeyboardInterrupt:
        sys.stdout.write(Colors.RESET)
        print("\n\nCancelled by user.")
        return EXIT_OK
    except Exception:
        logger.exception("Unhandled error")
        print("\nUnexpected error; see the log for details.")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(run())
