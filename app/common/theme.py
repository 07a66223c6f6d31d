from __future__ import annotations

import logging

from nicegui import ui

from app.state import ThemeMode


def get_palette(mode: ThemeMode) -> dict[str, str]:
    """Return palette tokens for the given mode."""
    if mode == "dark":
        return {
            "primary": "#2E7D5B",
            "primary_hover": "#1F5A41",
            "background": "#151A17",
            "surface": "#1E2521",
            "text": "#DCE5DF",
            "muted": "#8C9A91",
            "on_primary": "#EAF4EE",
            # Feedback colors, shared with the notification bar
            "accent": "#38BDF8",
            "positive": "#21BA45",
            "negative": "#DB2828",
            "info": "#31CCEC",
            "warning": "#F2C037",
        }
    # light
    return {
        "primary": "#3A9D6E",
        "primary_hover": "#2E7D5B",
        "background": "#F1F5F2",
        "surface": "#FFFFFF",
        "text": "#1A1F1C",
        "muted": "#6B7A71",
        "on_primary": "#FFFFFF",
        # Feedback colors, shared with the notification bar
        "accent": "#0284C7",
        "positive": "#21BA45",
        "negative": "#DB2828",
        "info": "#31CCEC",
        "warning": "#F2C037",
    }


def _css_vars(p: dict[str, str]) -> str:
    return f"""
  --panel-primary: {p["primary"]};
  --panel-primary-hover: {p["primary_hover"]};
  --panel-bg: {p["background"]};
  --panel-surface: {p["surface"]};
  --panel-text: {p["text"]};
  --panel-muted: {p["muted"]};
  --panel-on-primary: {p["on_primary"]};
  --panel-positive: {p["positive"]};
  --panel-negative: {p["negative"]};
  --panel-info: {p["info"]};
  --panel-warning: {p["warning"]};
"""


def apply_theme(mode: ThemeMode, dark: ui.dark_mode | None = None) -> None:
    """
    Apply the selected theme:
    - Set NiceGUI/Quasar colors and dark mode.
    - Tag <body> with data-theme so the CSS variables switch.
    """
    pal = get_palette(mode)
    ui.colors(
        primary=pal["primary"],
        secondary=pal["primary_hover"],
        accent=pal["accent"],
        positive=pal["positive"],
        negative=pal["negative"],
        info=pal["info"],
        warning=pal["warning"],
    )
    if dark is not None:
        dark.value = mode == "dark"
    elif mode == "dark":
        ui.dark_mode().enable()
    else:
        ui.dark_mode().disable()
    ui.query("body").props(f'data-theme="{mode}"')
    logging.debug("Applied theme: %s", mode)


def inject_layout_css() -> None:
    """Inject palette variables, card layout and notification bar styles."""
    ui.add_css(
        f"""
:root, body[data-theme="light"] {{{_css_vars(get_palette("light"))}}}
body[data-theme="dark"] {{{_css_vars(get_palette("dark"))}}}

body, .q-page {{ background: var(--panel-bg); color: var(--panel-text); }}
.q-header, .q-footer {{ background: var(--panel-surface); color: var(--panel-text); }}
.q-card {{ background: var(--panel-surface); color: var(--panel-text); }}
"""
    )
    ui.add_css(
        """
/* Status grid */
.status-grid {
  display: grid;
  grid-template-columns: max-content 1fr;
  gap: 0.25rem 1.5rem;
}
.status-grid .status-key { color: var(--panel-muted); }
.status-grid .status-val { font-variant-numeric: tabular-nums; }

.config-json {
  white-space: pre;
  font-family: ui-monospace, monospace;
  font-size: 0.85rem;
  overflow-x: auto;
}

/* Single-slot notification bar */
.global {
  position: fixed;
  left: 50%;
  bottom: 1.5rem;
  transform: translateX(-50%);
  min-width: 16rem;
  max-width: 90vw;
  padding: 0.6rem 1rem;
  border-radius: 8px;
  color: #fff;
  background: var(--panel-info);
  box-shadow: 0 2px 8px rgba(0,0,0,0.25);
  opacity: 1;
  transition: opacity 200ms ease;
  z-index: 6000;
}
.global.hidden { display: none; }
.global.ok { background: var(--panel-positive); }
.global.err { background: var(--panel-negative); }
.global.warning { background: var(--panel-warning); color: #1A1A1A; }
.global.fade-out { opacity: 0; }

@media (max-width: 600px) {
  .status-grid { grid-template-columns: 1fr 1fr; }
}
"""
    )
