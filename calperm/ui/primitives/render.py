"""
Styled text rendering.

Turns a RenderRequest (text segments plus colours, styles and line options)
into one line of terminal output for the active CapabilityMode, and can copy
the plain text of the line into a log file.

Colour policy for lines with more segments than colours:
- foreground: trailing segments reuse the FIRST supplied colour
- background: trailing segments get no background
"""

import os
import sys
import warnings
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional, Sequence, Union

from ...core.errors import ColorSpecError, RenderWarning
from ..components.layout import center_offset
from .colors import (
    ANSI4_FOREGROUND_CODES,
    ANSI8_RANGE,
    DEFAULT_FOREGROUND,
    NO_BACKGROUND,
    PALETTE,
    Colors,
    brighten,
    resolve_color_name,
)
from .terminal import CapabilityMode, NativeConsole, terminal_width


class Style(Enum):
    NONE = 0
    BOLD = 1
    FAINT = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    CROSSED_OUT = 9
    DOUBLE_UNDERLINE = 21
    OVERLINE = 53

    @classmethod
    def parse(cls, value) -> Optional["Style"]:
        """Style from a member or a name like "CrossedOut" / "crossed_out"."""
        if isinstance(value, Style):
            return value
        if isinstance(value, str):
            key = value.replace("_", "").replace(" ", "").lower()
            for style in cls:
                if style.name.replace("_", "").lower() == key:
                    return style
        return None


# ============================================================================
# Style shapes
# ============================================================================

@dataclass(frozen=True)
class NoStyle:
    """No per-segment styling."""

    def for_segment(self, index: int) -> tuple:
        return ()


@dataclass(frozen=True)
class ForAllSegments:
    """One style set applied to every segment."""
    styles: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "styles", _as_style_tuple(self.styles))

    def for_segment(self, index: int) -> tuple:
        return self.styles


@dataclass(frozen=True)
class PerSegment:
    """One style set per segment; segments past the end get none."""
    styles: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "styles", tuple(_as_style_tuple(s) for s in self.styles))

    def for_segment(self, index: int) -> tuple:
        return self.styles[index] if index < len(self.styles) else ()


StyleSpec = Union[NoStyle, ForAllSegments, PerSegment]
NO_STYLE = NoStyle()


def _as_style_tuple(value) -> tuple:
    if value is None:
        return ()
    if isinstance(value, (Style, str)):
        return (value,)
    return tuple(value)


# ============================================================================
# Request
# ============================================================================

@dataclass
class RenderRequest:
    """One line of output: parallel text/colour/style arrays plus line options."""
    texts: Sequence[str] = ()
    colors: Sequence = ()
    backgrounds: Sequence = ()
    styles: StyleSpec = NO_STYLE
    line_styles: Sequence = ()
    default_color: Optional[str] = None  # Used only when no colours are given (Gray when unset)
    # Line layout
    blank_line: bool = False
    lines_before: int = 0
    center: bool = False
    tabs: int = 0
    spaces: int = 0
    timestamp: bool = False
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    no_newline: bool = False
    lines_after: int = 0
    echo: bool = True
    # Log sink
    log_file: Optional[str] = None
    log_level: Optional[str] = None
    log_timestamp: bool = True
    log_retries: int = 2


class _Color(NamedTuple):
    name: Optional[str] = None   # Palette name
    code: Optional[int] = None   # Raw numeric code for the active mode


class _Segment(NamedTuple):
    text: str
    fg: Optional[_Color]
    bg: Optional[_Color]
    styles: tuple


DEFAULT_LOG_EXTENSION = ".log"


def resolve_log_path(name: str, log_dir: Path) -> Path:
    """
    Where a log sink name points.

    A bare file name (no path separator) goes into log_dir and gets ".log"
    when it has no extension; anything else is used as given.
    """
    if os.sep in name or (os.altsep and os.altsep in name) or "/" in name:
        return Path(name)
    path = Path(log_dir) / name
    if not path.suffix:
        path = path.with_suffix(DEFAULT_LOG_EXTENSION)
    return path


def _warn(message: str):
    warnings.warn(message, RenderWarning, stacklevel=4)


class StyledTextRenderer:
    """
    Renders RenderRequests for one terminal.

    The capability mode is fixed at construction. In NO_COLOR mode nothing
    but text is written; in NATIVE_COLOR mode colours go through console
    attribute calls and styles are dropped.
    """

    def __init__(
        self,
        mode: CapabilityMode,
        stream=None,
        log_dir: Path = None,
        width: int = None,
        console: NativeConsole = None,
        clock=datetime.now,
    ):
        self.mode = mode
        self.stream = stream or sys.stdout
        self.log_dir = Path(log_dir) if log_dir else Path.cwd()
        self._width = width
        self.console = console or (NativeConsole() if mode is CapabilityMode.NATIVE_COLOR else None)
        self.clock = clock

    @property
    def width(self) -> int:
        return self._width or terminal_width()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, request: RenderRequest) -> str:
        """
        Write one line and return what was written.

        Raises:
            ColorSpecError: If a colour is neither a name nor a number
        """
        texts = [request.texts] if isinstance(request.texts, str) else [str(t) for t in request.texts]
        colors = self._normalize_colors(request.colors, "colors")
        backgrounds = self._normalize_colors(request.backgrounds, "backgrounds")

        if request.blank_line:
            if request.echo:
                self._write("\n")
            return "\n"

        segments = self._resolve_segments(texts, colors, backgrounds, request)
        line_styles = self._resolve_line_styles(request.line_styles)
        plain = "".join(texts)

        prefix = "\n" * max(0, request.lines_before)
        if request.center and len(plain) < self.width:
            prefix += " " * center_offset(self.width, len(plain))
        prefix += "\t" * max(0, request.tabs)
        prefix += " " * max(0, request.spaces)
        if request.timestamp:
            prefix += f"[{self.clock().strftime(request.timestamp_format)}] "

        suffix = "" if request.no_newline else "\n"
        suffix += "\n" * max(0, request.lines_after)

        if self.mode is CapabilityMode.NATIVE_COLOR:
            output = prefix + plain + suffix
            if request.echo:
                self._write_native(prefix, segments, suffix, line_styles)
        else:
            body = "".join(self._format_segment(seg, line_styles) for seg in segments)
            output = prefix + body + suffix
            if request.echo:
                self._write(output)

        if request.log_file:
            self._append_log(request, plain)

        return output

    def line(self, *parts, **options) -> str:
        """
        Render a line built from parts.

        Each part is a plain string or a tuple (text, fg[, bg[, styles]]).
        Options are RenderRequest line options (center, spaces, ...).
        """
        texts, colors, backgrounds, styles = [], [], [], []
        for part in parts:
            if isinstance(part, tuple):
                text, fg, bg, seg_styles = (tuple(part) + (None, None, None))[:4]
            else:
                text, fg, bg, seg_styles = part, None, None, None
            texts.append(str(text))
            colors.append(fg)
            backgrounds.append(bg)
            styles.append(_as_style_tuple(seg_styles))

        style_spec = PerSegment(tuple(styles)) if any(styles) else NO_STYLE
        return self.render(RenderRequest(
            texts=texts, colors=colors, backgrounds=backgrounds, styles=style_spec, **options
        ))

    def write(self, text: str):
        """Write raw text (no styling)."""
        self._write(text)

    def newline(self, count: int = 1):
        self._write("\n" * count)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _normalize_colors(value, field_name: str) -> list:
        if value is None:
            return []
        if isinstance(value, bool):
            raise ColorSpecError(f"{field_name}: {value!r} is not a colour name or code")
        if isinstance(value, (str, int)):
            return [value]
        if not isinstance(value, (list, tuple)):
            raise ColorSpecError(f"{field_name}: expected a name, a code or a list, got {type(value).__name__}")
        for item in value:
            if item is None:
                continue
            if isinstance(item, bool) or not isinstance(item, (str, int)):
                raise ColorSpecError(f"{field_name}: {item!r} is not a colour name or code")
        return list(value)

    def _resolve_segments(self, texts, colors, backgrounds, request) -> list[_Segment]:
        styles_enabled = self.mode.uses_escapes
        style_spec = request.styles
        if not isinstance(style_spec, (NoStyle, ForAllSegments, PerSegment)):
            _warn(f"Unrecognised style shape {type(style_spec).__name__}; ignoring styles")
            style_spec = NO_STYLE

        segments = []
        for i, text in enumerate(texts):
            if i < len(colors):
                raw_fg = colors[i]
            elif colors:
                raw_fg = colors[0]
            else:
                raw_fg = request.default_color or DEFAULT_FOREGROUND
            raw_bg = backgrounds[i] if i < len(backgrounds) else None

            if self.mode is CapabilityMode.NO_COLOR:
                segments.append(_Segment(text, None, None, ()))
                continue

            fg = self._resolve_foreground(raw_fg)
            bg = self._resolve_background(raw_bg)
            styles = self._resolve_styles(style_spec.for_segment(i)) if styles_enabled else ()
            segments.append(_Segment(text, fg, bg, styles))

        return segments

    def _resolve_foreground(self, value) -> Optional[_Color]:
        if value is None:
            return None
        if isinstance(value, int):
            if self._numeric_ok(value):
                return _Color(code=value)
            _warn(f"Colour code {value} is not valid in {self.mode.value} mode; using {DEFAULT_FOREGROUND}")
            return _Color(name=DEFAULT_FOREGROUND)
        name = resolve_color_name(value)
        if name is None:
            _warn(f"Unknown colour '{value}'; using {DEFAULT_FOREGROUND}")
            return _Color(name=DEFAULT_FOREGROUND)
        return _Color(name=name)

    def _resolve_background(self, value) -> Optional[_Color]:
        if value is None:
            return None
        if isinstance(value, int):
            return _Color(code=value) if self._numeric_ok(value) else None
        if value.strip().lower() == NO_BACKGROUND.lower():
            return None
        name = resolve_color_name(value)
        if name is None:
            _warn(f"Unknown background colour '{value}'; using no background")
            return None
        return _Color(name=name)

    def _numeric_ok(self, code: int) -> bool:
        if self.mode is CapabilityMode.ANSI_8BIT:
            return code in ANSI8_RANGE
        if self.mode is CapabilityMode.ANSI_4BIT:
            return code in ANSI4_FOREGROUND_CODES
        return False

    @staticmethod
    def _resolve_styles(values) -> tuple:
        resolved = []
        for value in values:
            style = Style.parse(value)
            if style is None:
                _warn(f"Unsupported style '{value}'; ignoring it")
            elif style is not Style.NONE and style not in resolved:
                resolved.append(style)
        return tuple(resolved)

    def _resolve_line_styles(self, values) -> tuple:
        if not values or self.mode is CapabilityMode.NO_COLOR:
            return ()
        if isinstance(values, (Style, str)):
            values = (values,)
        resolved = self._resolve_styles(values)
        if self.mode is CapabilityMode.NATIVE_COLOR:
            # Only bold survives, as the intensity bit
            return tuple(s for s in resolved if s is Style.BOLD)
        return resolved

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _format_segment(self, seg: _Segment, line_styles: tuple) -> str:
        if not self.mode.uses_escapes:
            return seg.text

        bold_line = Style.BOLD in line_styles
        codes = [f"\x1b[{s.value}m" for s in seg.styles]
        codes += [f"\x1b[{s.value}m" for s in line_styles if s not in seg.styles]
        if seg.fg:
            codes.append(self._sgr(seg.fg, background=False, bold=bold_line))
        if seg.bg:
            codes.append(self._sgr(seg.bg, background=True, bold=False))

        if not codes:
            return seg.text
        return "".join(codes) + seg.text + Colors.RESET

    def _sgr(self, color: _Color, background: bool, bold: bool) -> str:
        if self.mode is CapabilityMode.ANSI_8BIT:
            if color.code is not None:
                index = color.code
            else:
                name = brighten(color.name) if bold else color.name
                index = PALETTE[name].ansi8
            return f"\x1b[{48 if background else 38};5;{index}m"

        if color.code is not None:
            code = color.code
        else:
            entry = PALETTE[color.name]
            code = entry.ansi4_bright if bold else entry.ansi4
        return f"\x1b[{code + 10 if background else code}m"

    def _write_native(self, prefix: str, segments: list[_Segment], suffix: str, line_styles: tuple):
        bold_line = Style.BOLD in line_styles
        self._write(prefix)
        for seg in segments:
            if not (seg.fg or seg.bg):
                self._write(seg.text)
                continue
            fg = PALETTE[seg.fg.name].native if seg.fg and seg.fg.name else None
            if fg is not None and bold_line:
                fg |= 0x08
            bg = PALETTE[seg.bg.name].native if seg.bg and seg.bg.name else None
            self.stream.flush()
            self.console.set_attributes(fg, bg)
            self._write(seg.text)
            self.console.reset()
        self._write(suffix)

    def _write(self, text: str):
        if not text:
            return
        self.stream.write(text)
        self.stream.flush()

    def _append_log(self, request: RenderRequest, plain: str):
        """Append the plain line to the log sink; drops the line after retries."""
        path = resolve_log_path(request.log_file, self.log_dir)
        line = ""
        if request.log_timestamp:
            line += f"[{self.clock().strftime(request.timestamp_format)}] "
        if request.log_level:
            line += f"[{request.log_level.upper()}] "
        line += plain

        attempts = max(1, request.log_retries)
        last_error = None
        for _ in range(attempts):
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
                return
            except OSError as e:
                last_error = e
        _warn(f"Could not write to log file {path} after {attempts} attempts: {last_error}")
