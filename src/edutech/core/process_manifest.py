"""Editing the `apps` array of a PM2 `ecosystem.config.js`.

The file is JavaScript, so it is never executed. The `apps` array literal is
located by text search, read with a small JavaScript-literal reader, turned
into ProcessDescriptor values, and written back as a JSON-formatted array.
Everything outside the array is left byte-for-byte intact.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from edutech.core.errors import ManifestError
from edutech.core.naming import app_name

logger = logging.getLogger(__name__)

_APPS_KEY = re.compile(r"""(?:\bapps|["']apps["'])\s*:\s*\[""")
_IDENTIFIER_START = re.compile(r"[A-Za-z_$]")
_IDENTIFIER = re.compile(r"[A-Za-z0-9_$]*")
_NUMBER = re.compile(r"-?(?:0[xX][0-9a-fA-F]+|\d+(?:\.\d+)?(?:[eE][+-]?\d+)?|\.\d+)")
_KEYWORDS: dict[str, Any] = {"true": True, "false": False, "null": None, "undefined": None}
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


class JsLiteralError(ValueError):
    """Raised when text is not a plain JavaScript data literal."""


class _JsLiteralReader:
    """Recursive-descent reader for JS object/array/string/number literals.

    Accepts unquoted keys, single/double/backtick quotes, comments and
    trailing commas. Anything computed (calls, template interpolation,
    spreads, identifiers in value position) is rejected.
    """

    def __init__(self, text: str, pos: int = 0) -> None:
        self._text = text
        self._pos = pos

    @property
    def pos(self) -> int:
        return self._pos

    def at_end(self) -> bool:
        self._skip_trivia()
        return self._pos >= len(self._text)

    def _error(self, message: str) -> JsLiteralError:
        line = self._text.count("\n", 0, self._pos) + 1
        return JsLiteralError(f"{message} at line {line}")

    def _skip_trivia(self) -> None:
        text = self._text
        while self._pos < len(text):
            ch = text[self._pos]
            if ch.isspace():
                self._pos += 1
            elif text.startswith("//", self._pos):
                end = text.find("\n", self._pos)
                self._pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self._pos):
                end = text.find("*/", self._pos + 2)
                if end == -1:
                    raise self._error("Unterminated comment")
                self._pos = end + 2
            else:
                return

    def _peek(self) -> str:
        self._skip_trivia()
        if self._pos >= len(self._text):
            raise self._error("Unexpected end of input")
        return self._text[self._pos]

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            raise self._error(f"Expected {ch!r}")
        self._pos += 1

    def read_value(self) -> Any:
        ch = self._peek()
        if ch == "{":
            return self._read_object()
        if ch == "[":
            return self._read_array()
        if ch in "\"'`":
            return self._read_string()
        number = _NUMBER.match(self._text, self._pos)
        if number:
            self._pos = number.end()
            literal = number.group()
            if literal.lstrip("-").lower().startswith("0x"):
                return int(literal, 16)
            value = float(literal)
            return int(value) if value.is_integer() and "." not in literal else value
        if _IDENTIFIER_START.match(ch):
            word = self._read_identifier()
            if word in _KEYWORDS:
                return _KEYWORDS[word]
            raise self._error(f"Unsupported expression {word!r}")
        raise self._error(f"Unexpected character {ch!r}")

    def _read_identifier(self) -> str:
        start = self._pos
        self._pos += 1
        match = _IDENTIFIER.match(self._text, self._pos)
        if match:
            self._pos = match.end()
        return self._text[start : self._pos]

    def _read_string(self) -> str:
        quote = self._text[self._pos]
        self._pos += 1
        chars: list[str] = []
        text = self._text
        while self._pos < len(text):
            ch = text[self._pos]
            if ch == quote:
                self._pos += 1
                return "".join(chars)
            if ch == "\\":
                self._pos += 1
                if self._pos >= len(text):
                    break
                escaped = text[self._pos]
                if escaped == "u":
                    digits = text[self._pos + 1 : self._pos + 5]
                    try:
                        chars.append(chr(int(digits, 16)))
                    except ValueError:
                        raise self._error("Invalid unicode escape") from None
                    self._pos += 5
                    continue
                if escaped != "\n":
                    chars.append(_ESCAPES.get(escaped, escaped))
                self._pos += 1
                continue
            if quote == "`" and text.startswith("${", self._pos):
                raise self._error("Template interpolation is not supported")
            if ch == "\n" and quote != "`":
                raise self._error("Unterminated string")
            chars.append(ch)
            self._pos += 1
        raise self._error("Unterminated string")

    def _read_key(self) -> str:
        ch = self._peek()
        if ch in "\"'`":
            return self._read_string()
        number = _NUMBER.match(self._text, self._pos)
        if number:
            self._pos = number.end()
            return number.group()
        if _IDENTIFIER_START.match(ch):
            return self._read_identifier()
        raise self._error(f"Unexpected character {ch!r} in object key")

    def _read_object(self) -> dict[str, Any]:
        self._expect("{")
        result: dict[str, Any] = {}
        while True:
            if self._peek() == "}":
                self._pos += 1
                return result
            key = self._read_key()
            self._expect(":")
            result[key] = self.read_value()
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != "}":
                raise self._error("Expected ',' or '}'")

    def _read_array(self) -> list[Any]:
        self._expect("[")
        result: list[Any] = []
        while True:
            if self._peek() == "]":
                self._pos += 1
                return result
            result.append(self.read_value())
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != "]":
                raise self._error("Expected ',' or ']'")


def parse_js_literal(text: str) -> Any:
    """Read a single JavaScript data literal occupying all of `text`."""
    reader = _JsLiteralReader(text)
    value = reader.read_value()
    if not reader.at_end():
        raise JsLiteralError("Trailing content after literal")
    return value


_DESCRIPTOR_KEYS = ("name", "cwd", "script", "args", "env")


@dataclass(frozen=True)
class ProcessDescriptor:
    """One PM2 app entry."""

    name: str
    cwd: str
    script: str = "npm"
    args: str = "run dev"
    env: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def port(self) -> int | None:
        raw = self.env.get("PORT")
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str) and raw.strip().isdigit():
            return int(raw)
        return None

    @staticmethod
    def from_json(data: Any) -> "ProcessDescriptor":
        if not isinstance(data, dict):
            raise ManifestError(f"App entry is not an object: {data!r}")
        env = data.get("env")
        return ProcessDescriptor(
            name=str(data.get("name", "")),
            cwd=str(data.get("cwd", "")),
            script=str(data.get("script", "")),
            args=str(data.get("args", "")),
            env=dict(env) if isinstance(env, dict) else {},
            extra={k: v for k, v in data.items() if k not in _DESCRIPTOR_KEYS},
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "cwd": self.cwd,
            "script": self.script,
            "args": self.args,
            "env": self.env,
        }
        data.update(self.extra)
        return data


def portal_descriptor(
    portal_name: str, port: int, portals_dir: str = "portals"
) -> ProcessDescriptor:
    return ProcessDescriptor(
        name=app_name(portal_name),
        cwd=f"./{portals_dir}/{portal_name}",
        script="npm",
        args="run dev",
        env={"PORT": port, "NODE_ENV": "development"},
    )


def next_port(apps: list[ProcessDescriptor], base_port: int = 3000) -> int:
    """One past the highest port in use, or `base_port` when none is."""
    ports = [app.port for app in apps if app.port is not None]
    if not ports:
        return base_port
    return max(ports) + 1


EMPTY_ECOSYSTEM = "module.exports = {\n  apps: []\n};\n"


class ProcessManifest:
    """Typed read-modify-write access to `ecosystem.config.js`.

    Examples:
        >>> manifest = ProcessManifest(Path("ecosystem.config.js"))
        >>> manifest.register("cbt")
        3000
        >>> manifest.deregister("cbt")
        True
    """

    def __init__(self, path: Path, *, portals_dir: str = "portals", base_port: int = 3000) -> None:
        self._path = path
        self._portals_dir = portals_dir
        self._base_port = base_port

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def _read(self) -> tuple[str, int, int, list[ProcessDescriptor]]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"Cannot read {self._path}: {e}") from e

        match = _APPS_KEY.search(text)
        if match is None:
            raise ManifestError(f"No apps array found in {self._path}")
        start = match.end() - 1
        reader = _JsLiteralReader(text, start)
        try:
            raw_apps = reader.read_value()
        except JsLiteralError as e:
            raise ManifestError(f"Cannot parse apps in {self._path}: {e}") from e
        apps = [ProcessDescriptor.from_json(entry) for entry in raw_apps]
        return text, start, reader.pos, apps

    def _write(self, text: str, start: int, end: int, apps: list[ProcessDescriptor]) -> None:
        line_start = text.rfind("\n", 0, start) + 1
        indent = re.match(r"[ \t]*", text[line_start:start]).group()
        rendered = json.dumps([app.to_json() for app in apps], indent=2)
        rendered = rendered.replace("\n", "\n" + indent)
        try:
            self._path.write_text(text[:start] + rendered + text[end:], encoding="utf-8")
        except OSError as e:
            raise ManifestError(f"Cannot write {self._path}: {e}") from e

    def apps(self) -> list[ProcessDescriptor]:
        if not self.exists():
            return []
        return self._read()[3]

    def register(self, portal_name: str) -> int:
        """Add the portal's app entry and return its port.

        An app with the same name is left untouched and its port returned.

        Raises:
            ManifestError: If the file is missing or its apps array unreadable
        """
        text, start, end, apps = self._read()
        name = app_name(portal_name)
        for app in apps:
            if app.name == name:
                existing = app.port
                return existing if existing is not None else self._base_port

        port = next_port(apps, self._base_port)
        apps.append(portal_descriptor(portal_name, port, self._portals_dir))
        self._write(text, start, end, apps)
        logger.debug("Registered %s on port %d in %s", name, port, self._path)
        return port

    def deregister(self, portal_name: str) -> bool:
        """Drop the portal's app entry. A missing file is a no-op.

        Returns:
            True if the manifest was modified
        """
        if not self.exists():
            return False
        text, start, end, apps = self._read()
        name = app_name(portal_name)
        remaining = [app for app in apps if app.name != name]
        if len(remaining) == len(apps):
            return False
        self._write(text, start, end, remaining)
        logger.debug("Deregistered %s from %s", name, self._path)
        return True
