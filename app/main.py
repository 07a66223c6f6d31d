import argparse
import logging
import os
import sys

from nicegui import Client, ui
from nicegui import app as ng_app

from app.common import i18n
from app.common.logging_config import (
    TRACE,
    attach_ui_log,
    configure_logging,
    detach_ui_log,
)
from app.common.render import NiceGuiRenderTarget
from app.common.theme import inject_layout_css
from app.constants import (
    DEVICE_BASE_URL,
    HOOK_NOTIFY_BAR,
    HOOK_THEME_ICON,
    LOG_LEVEL,
    SERVER_HOST,
    SERVER_PORT,
    STORAGE_SECRET,
)
from app.pages.dashboard import DashboardPage
from app.pages.settings import SettingsPage
from app.services.commands import DeviceCommandDispatcher
from app.services.device_client import client
from app.services.notifications import NotificationCenter
from app.services.preferences import (
    THEME_ICONS,
    RefreshIntervalConfig,
    ThemePreference,
)
from app.services.status_sync import StatusSynchronizer

# Runtime configuration (resolved later from CLI/env)
RUNTIME_SERVER_HOST = SERVER_HOST
RUNTIME_SERVER_PORT = SERVER_PORT


def build_header(theme: ThemePreference, target: NiceGuiRenderTarget) -> None:
    # Header: title left, theme toggle right
    with (
        ui.header().classes("px-4 py-2"),
        ui.row().classes("w-full items-center justify-between"),
    ):
        ui.label(i18n.tr("title")).classes("text-lg font-medium")
        with ui.row().classes("items-center gap-2"):
            ui.label(client.base_url).classes("text-sm text-[var(--panel-muted)]")
            target.register(
                HOOK_THEME_ICON,
                ui.button(
                    THEME_ICONS[theme.get_current_theme()],
                    on_click=lambda: theme.toggle_theme(),
                ).props("round flat"),
            )


@ui.page("/")
async def index(page_client: Client) -> None:
    target = NiceGuiRenderTarget()
    target.dark = ui.dark_mode()
    inject_layout_css()

    # Theme first so nothing renders in the wrong palette
    store = ng_app.storage.user
    theme = ThemePreference(store, target)
    theme.initialize()

    notifications = NotificationCenter(target)
    sync = StatusSynchronizer(client, target)
    refresh = RefreshIntervalConfig(
        store,
        notifications,
        on_change=sync.restart,
    )
    dispatcher = DeviceCommandDispatcher(client, target, notifications, sync)

    build_header(theme, target)
    with ui.column().classes("w-full p-4 gap-4"):
        DashboardPage(target, sync, dispatcher).build()
        SettingsPage(refresh).build()
        with ui.expansion("Activity log").classes("w-full"):
            log_widget = ui.log(max_lines=200).classes("w-full h-48")
            attach_ui_log(log_widget)
    target.register(HOOK_NOTIFY_BAR, ui.label("").classes("global hidden"))

    # Poll only while the browser is attached; resume after a reconnect
    page_client.on_connect(lambda: sync.start(refresh.get_refresh_ms()))
    page_client.on_disconnect(sync.stop)
    page_client.on_disconnect(lambda: detach_ui_log(log_widget))
    await page_client.connected()
    sync.start(refresh.get_refresh_ms())
    await sync.get_config()


async def _close_client() -> None:
    await client.close()


ng_app.on_shutdown(_close_client)


def main() -> None:
    global RUNTIME_SERVER_HOST, RUNTIME_SERVER_PORT

    # CLI: web bind, device target, language and log level
    parser = argparse.ArgumentParser(description="Irrigation controller web panel")
    parser.add_argument("--host", default=SERVER_HOST, help="Webserver bind host")
    parser.add_argument(
        "--port", type=int, default=SERVER_PORT, help="Webserver bind port"
    )
    parser.add_argument(
        "--device-url",
        default=DEVICE_BASE_URL,
        help="Base URL of the irrigation controller API",
    )
    parser.add_argument(
        "--lang", default=i18n.get_language(), help="Message language (en, lt)"
    )
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set log level",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Enable WARNING logging"
    )
    args, _ = parser.parse_known_args()

    RUNTIME_SERVER_HOST = args.host
    RUNTIME_SERVER_PORT = int(args.port)
    client.base_url = args.device_url.rstrip("/")
    i18n.set_language(args.lang)

    # Resolve log level priority: explicit --log-level > -v/-q > env default from constants
    if args.log_level:
        if args.log_level == "TRACE":
            runtime_log_level = TRACE
        else:
            runtime_log_level = getattr(logging, args.log_level)
    elif args.verbose >= 3:
        os.environ["IRRIGATION_TRACE"] = "1"
        runtime_log_level = TRACE
    elif args.verbose >= 2:
        runtime_log_level = logging.DEBUG
    elif args.verbose == 1:
        runtime_log_level = logging.INFO
    elif args.quiet:
        runtime_log_level = logging.WARNING
    else:
        runtime_log_level = LOG_LEVEL

    configure_logging(runtime_log_level)
    logging.info(
        "Webserver bind: host=%s port=%s", RUNTIME_SERVER_HOST, RUNTIME_SERVER_PORT
    )
    logging.info("Device target: %s", client.base_url)

    ui.run(
        title=i18n.tr("title"),
        host=RUNTIME_SERVER_HOST,
        port=RUNTIME_SERVER_PORT,
        reload=False,
        show=False,
        storage_secret=STORAGE_SECRET,
        loop="uvloop" if sys.platform != "win32" else "asyncio",
        http="httptools",
        ws="wsproto",
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
