"""Color & style helpers for rendering todos in a terminal.

Decisions:
- A StyleScheme holds one ANSI prefix per rendered element; "" means unstyled.
- The plain scheme (all slots empty) renders byte-identical to the todo.txt line.
- Completed todos are drawn entirely in the "faded" style when one is set.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Slots can be overridden with TODOBOARD_STYLE_<SLOT>=<SGR params>, e.g. 1;31.
"""
from __future__ import annotations
import os
import re
import sys
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

ESC = "\033["


def _code(part: str) -> str:
    """ANSI escape sequence for an SGR parameter string."""
    return f"{ESC}{part}m"


def _fg_256(idx: int) -> str:
    return _code(f"38;5;{idx}")


RED = _fg_256(1)
GREEN = _fg_256(2)
YELLOW = _fg_256(3)
DBLUE = _fg_256(4)
PURPLE = _fg_256(5)
LBLUE = _fg_256(6)
GRAY = _fg_256(7)

BOLD = _code('1')
FADE = _code('2')
ITALIC = _code('3')
UNDER = _code('4')
RESET = _code('0')

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
_SGR_PARAMS_RE = re.compile(r"^[0-9;]+$")
ENV_PREFIX = "TODOBOARD_STYLE_"


@dataclass(frozen=True)
class StyleScheme:
    faded: str = ""

    tick: str = ""
    priority: str = ""
    completion: str = ""
    creation: str = ""

    description: str = ""
    context: str = ""
    project: str = ""

    deadline: str = ""
    metadata: str = ""

    def with_style(self, **slots: Optional[str]) -> "StyleScheme":
        """Copy with some slots replaced; None clears a slot."""
        return replace(self, **{k: v or "" for k, v in slots.items()})

    def is_plain(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def for_todo(self, completed: bool) -> "StyleScheme":
        """Scheme to use for one todo: faded-only when completed, faded-less otherwise."""
        if completed and self.faded:
            return StyleScheme(faded=self.faded)
        return self.with_style(faded=None)


PLAIN_STYLE = StyleScheme()

DEFAULT_STYLE = StyleScheme(
    faded=FADE + GRAY,
    priority=BOLD + LBLUE,
    completion=UNDER + PURPLE,
    creation=UNDER + YELLOW,
    context=ITALIC + GREEN,
    project=ITALIC + YELLOW,
    deadline=BOLD + RED,
    metadata=ITALIC + DBLUE,
)


def paint(text: str, style: str) -> str:
    """Apply an ANSI style to text; unstyled or empty text passes through."""
    if not style or not text:
        return text
    return style + text + RESET


def visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))


def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def colors_enabled(env: Optional[Mapping[str, str]] = None, stream=None) -> bool:
    env = os.environ if env is None else env
    if env.get("NO_COLOR") is not None:
        return False
    if _truthy(env.get("FORCE_COLOR")):
        return True
    stream = sys.stdout if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def scheme_overrides(env: Optional[Mapping[str, str]] = None) -> dict:
    """Slot overrides from TODOBOARD_STYLE_* variables; malformed values are ignored."""
    env = os.environ if env is None else env
    out: dict = {}
    for f in fields(StyleScheme):
        raw = env.get(ENV_PREFIX + f.name.upper())
        if raw is None:
            continue
        raw = raw.strip()
        if raw == "":
            out[f.name] = ""
        elif _SGR_PARAMS_RE.match(raw):
            out[f.name] = _code(raw)
    return out


def active_scheme(env: Optional[Mapping[str, str]] = None, stream=None) -> StyleScheme:
    """Scheme for the current terminal: DEFAULT_STYLE plus env overrides, or plain."""
    if not colors_enabled(env, stream):
        return PLAIN_STYLE
    return replace(DEFAULT_STYLE, **scheme_overrides(env))


__all__ = [
    'StyleScheme', 'PLAIN_STYLE', 'DEFAULT_STYLE', 'paint', 'visible_len',
    'colors_enabled', 'scheme_overrides', 'active_scheme',
    'RED', 'GREEN', 'YELLOW', 'DBLUE', 'PURPLE', 'LBLUE', 'GRAY',
    'BOLD', 'FADE', 'ITALIC', 'UNDER', 'RESET', 'ANSI_RE',
]
