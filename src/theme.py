"""Color & style helpers for status lines.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
"""
from __future__ import annotations
import os, sys

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_ERR_ENABLE = (_FORCE or sys.stderr.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_TRUECOLOR_TERM = any(tok in _COLORTERM for tok in ("truecolor", "24bit"))
_USE_TRUECOLOR = _ENABLE and _TRUECOLOR_TERM

def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return f"\033[38;5;{16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)}m"

def _fg(hex_code: str, truecolor: bool) -> str:
    r, g, b = _hex_to_rgb(hex_code)
    if truecolor:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    return _fg(hex_code, _USE_TRUECOLOR)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_PRIMARY = '#476EAE'
HEX_CREATED = '#A7E399'
HEX_CARRIED = '#F6FF99'
HEX_ERROR = '#E5484D'

PRIMARY = _from_hex(HEX_PRIMARY)
CREATED_COLOR = _from_hex(HEX_CREATED) + BOLD
EXISTS_COLOR = PRIMARY
SKIPPED_COLOR = DIM + PRIMARY
CARRIED_COLOR = _from_hex(HEX_CARRIED)

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

def error_text(text: str) -> str:
    """Style a stderr line; gated on stderr, not stdout, being a terminal."""
    if not _ERR_ENABLE:
        return text
    return _fg(HEX_ERROR, _TRUECOLOR_TERM) + "\033[1m" + text + "\033[0m"

__all__ = [
    'color','RESET','BOLD','DIM','CREATED_COLOR','EXISTS_COLOR','SKIPPED_COLOR','CARRIED_COLOR','error_text',
]
