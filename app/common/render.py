from __future__ import annotations

import logging
from typing import Protocol

from nicegui import ui

from app.common.theme import apply_theme
from app.constants import HOOK_ROOT


class RenderTarget(Protocol):
    """Named hooks the panel logic reads from and writes to."""

    def set_text(self, hook: str, text: str) -> None: ...

    def get_text(self, hook: str) -> str: ...

    def set_classes(self, hook: str, classes: str) -> None: ...

    def add_class(self, hook: str, cls: str) -> None: ...

    def set_attr(self, hook: str, name: str, value: str) -> None: ...


class MemoryRenderTarget:
    """Dict-backed render target for headless use and tests."""

    def __init__(self) -> None:
        self.texts: dict[str, str] = {}
        self.classes: dict[str, list[str]] = {}
        self.attrs: dict[str, dict[str, str]] = {}

    def set_text(self, hook: str, text: str) -> None:
        self.texts[hook] = text

    def get_text(self, hook: str) -> str:
        return self.texts.get(hook, "")

    def set_classes(self, hook: str, classes: str) -> None:
        self.classes[hook] = classes.split()

    def add_class(self, hook: str, cls: str) -> None:
        current = self.classes.setdefault(hook, [])
        if cls not in current:
            current.append(cls)

    def has_class(self, hook: str, cls: str) -> bool:
        return cls in self.classes.get(hook, [])

    def set_attr(self, hook: str, name: str, value: str) -> None:
        self.attrs.setdefault(hook, {})[name] = value


class NiceGuiRenderTarget:
    """Maps hook names onto the NiceGUI elements of one page."""

    def __init__(self) -> None:
        self._elements: dict[str, ui.element] = {}
        self.dark: ui.dark_mode | None = None

    def register(self, hook: str, element: ui.element) -> ui.element:
        self._elements[hook] = element
        return element

    def _get(self, hook: str) -> ui.element | None:
        el = self._elements.get(hook)
        if el is None:
            logging.debug("Render hook not registered: %s", hook)
        return el

    def set_text(self, hook: str, text: str) -> None:
        el = self._get(hook)
        if el is None:
            return
        if isinstance(el, ui.input):
            el.value = text
        else:
            el.text = text  # type: ignore[attr-defined]

    def get_text(self, hook: str) -> str:
        el = self._get(hook)
        if el is None:
            return ""
        if isinstance(el, ui.input):
            return str(el.value or "")
        return str(getattr(el, "text", "") or "")

    def set_classes(self, hook: str, classes: str) -> None:
        el = self._get(hook)
        if el is not None:
            el.classes(replace=classes)

    def add_class(self, hook: str, cls: str) -> None:
        el = self._get(hook)
        if el is not None:
            el.classes(add=cls)

    def set_attr(self, hook: str, name: str, value: str) -> None:
        if hook == HOOK_ROOT and name == "data-theme":
            apply_theme(value, self.dark)  # type: ignore[arg-type]
            return
        if hook == HOOK_ROOT:
            ui.query("body").props(f'{name}="{value}"')
            return
        el = self._get(hook)
        if el is not None:
            el.props(f'{name}="{value}"')
