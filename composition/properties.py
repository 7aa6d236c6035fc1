"""
A text-only property table built by subclassing ``dict``.

This is a cautionary example: ``Properties`` is not really a ``dict``, but it
inherits the whole ``dict`` surface anyway. The inherited accessors know nothing
about the default table or the text-only rule, so they can disagree with the
subclass's own accessors, and they can put entries in the table that the subclass
can no longer read. ``composition.textmap`` shows the wrapped alternative.
"""

import re
from typing import FrozenSet, Iterable, Optional, TextIO, Tuple

from composition.util import PropertyTypeError, debug, name_of_type


def _require_text(thing: object, what: str) -> str:
    if not isinstance(thing, str):
        raise PropertyTypeError(
            f"{what} of type '{name_of_type(type(thing))}' cannot be cast to str"
        )
    return thing


class Properties(dict):
    """
    A table of string properties, with an optional table of defaults behind it.

    >>> defaults = Properties()
    >>> defaults.set_property("color", "red")
    >>> p = Properties(defaults)
    >>> p.get_property("color")
    'red'
    >>> p.get("color") is None
    True
    """

    defaults: Optional["Properties"]

    def __init__(self, defaults: Optional["Properties"] = None):
        super().__init__()
        self.defaults = defaults

    def put(self, key, value):
        """
        Raw insertion, inherited in spirit from the underlying table.

        Returns the previous value for ``key``, if any. No type checks are made.
        """
        previous = dict.get(self, key)
        self[key] = value
        return previous

    def set_property(self, key: str, value: str) -> Optional[object]:
        _require_text(key, "key")
        _require_text(value, "value")
        return self.put(key, value)

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Look up ``key`` here, then in the defaults chain.

        Raises PropertyTypeError if ``key`` is not a str, or if the value stored for
        it is not a str.
        """
        _require_text(key, "key")
        value = dict.get(self, key)
        if value is None:
            if self.defaults is not None:
                return self.defaults.get_property(key, default)
            return default
        return _require_text(value, "value")

    def property_names(self) -> FrozenSet[str]:
        """
        Names of all text properties, including those only found in the defaults.

        Entries whose key or value is not text are skipped.
        """
        names = set() if self.defaults is None else set(self.defaults.property_names())
        for key, value in self.items():
            if isinstance(key, str) and isinstance(value, str):
                names.add(key)
        return frozenset(names)

    def store(self, out: TextIO, comments: Optional[str] = None) -> None:
        """
        Write this table's own entries as ``key=value`` lines.

        Raises PropertyTypeError when an entry is not text; nothing after that entry
        is written.
        """
        if comments is not None:
            for line in comments.splitlines():
                out.write(f"#{line}\n")
        for key, value in self.items():
            key = _require_text(key, "key")
            value = _require_text(value, "value")
            out.write(f"{_escape(key, True)}={_escape(value, False)}\n")

    def load(self, lines: Iterable[str]) -> None:
        for line in lines:
            entry = _parse_line(line)
            if entry is not None:
                debug("Loaded property", entry[0])
                self.put(*entry)


_KEY_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
        "\f": "\\f",
        " ": "\\ ",
        "=": "\\=",
        ":": "\\:",
    }
)
_VALUE_ESCAPES = str.maketrans(
    {"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\f": "\\f"}
)
_UNESCAPE = re.compile(r"\\(.)", re.DOTALL)
_UNESCAPED_CHARS = {"n": "\n", "t": "\t", "r": "\r", "f": "\f"}
_BLANKS = " \t\f"


def _escape(text: str, is_key: bool) -> str:
    """
    Escape text so that ``_parse_line`` reads it back unchanged.

    >>> _escape("#a b", True)
    '\\\\#a\\\\ b'
    >>> _escape(" v", False)
    '\\\\ v'
    """
    if is_key:
        escaped = text.translate(_KEY_ESCAPES)
        # A bare leading "#" or "!" would turn the line into a comment.
        if escaped[:1] in ("#", "!"):
            escaped = "\\" + escaped
    else:
        escaped = text.translate(_VALUE_ESCAPES)
        # Leading blanks of a value are skipped on load.
        if escaped[:1] == " ":
            escaped = "\\" + escaped
    return escaped


def _unescape(text: str) -> str:
    return _UNESCAPE.sub(lambda m: _UNESCAPED_CHARS.get(m.group(1), m.group(1)), text)


def _parse_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Parse one ``key=value``, ``key:value`` or ``key value`` line.

    The key ends at the first unescaped blank or separator. Blanks around the
    separator are skipped; trailing blanks belong to the value.

    >>> _parse_line("a\\\\=b = c d")
    ('a=b', 'c d')
    >>> _parse_line("a\\\\ b\\\\t=\\\\ c")
    ('a b\\t', ' c')
    >>> _parse_line("# comment") is None
    True
    """
    line = line.rstrip("\r\n").lstrip(_BLANKS)
    if not line or line[0] in "#!":
        return None
    escaped = False
    key_end = len(line)
    for idx, ch in enumerate(line):
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch in "=:" or ch in _BLANKS:
            key_end = idx
            break
    rest = line[key_end:].lstrip(_BLANKS)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_BLANKS)
    return (_unescape(line[:key_end]), _unescape(rest))


def inconsistency_caused_by_default_value() -> Tuple[object, Optional[str]]:
    """
    Show the inherited accessor and the property accessor disagreeing.

    >>> inconsistency_caused_by_default_value()
    (None, '100')
    """
    def_p = Properties()
    def_p.set_property("key", "100")
    p = Properties(def_p)
    return (p.get("key"), p.get_property("key"))


def destroy_by_super_class() -> Optional[str]:
    """
    Sneak a non-text key in through the inherited insertion path.

    The text-only accessor then fails:

    >>> destroy_by_super_class()
    Traceback (most recent call last):
      ...
    composition.util.PropertyTypeError: key of type 'object' cannot be cast to str
    """
    p = Properties()
    key_obj = object()
    p.put(key_obj, "value")
    return p.get_property(key_obj)  # type: ignore
