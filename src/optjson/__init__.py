"""
Optimistic JSON decoding for incomplete and malformed documents.

Decoding runs in two phases. A structural indexer makes one forward pass over
the UTF-8 bytes recording where every token starts; an on-demand parser then
walks those offsets with a cursor and builds Python values straight from the
buffer. Unterminated strings and containers close at end-of-input, truncated
numbers are completed, and unrecognised tokens are skipped instead of
aborting the parse.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from string import hexdigits
from typing import IO
from typing import Any
from typing import Final
from typing import TypeAlias

from ._indexer import CLOSE_BRACE
from ._indexer import CLOSE_BRACKET
from ._indexer import COLON
from ._indexer import COMMA
from ._indexer import NUMBER_START
from ._indexer import OPEN_BRACE
from ._indexer import OPEN_BRACKET
from ._indexer import QUOTE
from ._indexer import Offset
from ._indexer import index_structural
from ._indexer import scan_number
from ._indexer import scan_string
from ._profiling import HotPathStats
from ._profiling import ProfileContext
from ._profiling import clear_hot_path_stats
from ._profiling import disable_profiling
from ._profiling import enable_profiling
from ._profiling import get_hot_path_stats

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Type aliases for domain concepts - recursive definition
JsonValue = (
    str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
)

DEFAULT_MAX_DEPTH: Final = 256

_OPENERS: Final = frozenset((OPEN_BRACKET, OPEN_BRACE))
_CLOSERS: Final = frozenset((CLOSE_BRACKET, CLOSE_BRACE))


class Absent(Enum):
    """
    Marks a slot where no value could be decoded.

    Distinct from JSON ``null`` (decoded as ``None``). Test for it with
    ``result is ABSENT``; truthiness also matches falsy JSON values.
    """

    ABSENT = "absent"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    __str__ = __repr__


ABSENT: Final = Absent.ABSENT

DecodeResult: TypeAlias = JsonValue | Absent
TextInput: TypeAlias = str | bytes | bytearray | memoryview


class TokenKind(Enum):
    """Kinds of value a structural offset can introduce."""

    ARRAY = "array"
    OBJECT = "object"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    NUMBER = "number"


_DISPATCH: Final[dict[int, TokenKind]] = {
    OPEN_BRACKET: TokenKind.ARRAY,
    OPEN_BRACE: TokenKind.OBJECT,
    QUOTE: TokenKind.STRING,
    ord("t"): TokenKind.BOOLEAN,
    ord("f"): TokenKind.BOOLEAN,
    ord("n"): TokenKind.NULL,
    **{byte: TokenKind.NUMBER for byte in NUMBER_START},
}


def classify(byte: int) -> TokenKind | None:
    """Returns the kind of value ``byte`` starts, or None if it starts none."""
    return _DISPATCH.get(byte)


@dataclass(frozen=True)
class DecodeConfig:
    """
    Immutable decoding options.

    ``max_depth`` bounds container nesting; deeper containers are dropped.
    ``decode_escapes`` controls translation of backslash escapes in strings.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    decode_escapes: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or isinstance(
            self.max_depth, bool
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if not isinstance(self.decode_escapes, bool):
            raise TypeError("decode_escapes must be a boolean")


_ESCAPES: Final = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _read_hex4(inner: str, i: int) -> int | None:
    digits = inner[i : i + 4]
    if len(digits) != 4 or any(c not in hexdigits for c in digits):
        return None
    return int(digits, 16)


def _process_escape_sequence(inner: str, i: int) -> tuple[str, int]:
    """
    Translates the escape starting at ``inner[i]``.

    Returns the replacement text and the position after the escape. Unknown
    and truncated escapes are passed through verbatim.
    """
    if i + 1 >= len(inner):
        return "\\", i + 1

    next_char = inner[i + 1]
    if next_char in _ESCAPES:
        return _ESCAPES[next_char], i + 2
    if next_char != "u":
        return inner[i : i + 2], i + 2

    code_point = _read_hex4(inner, i + 2)
    if code_point is None:
        return inner[i : i + 2], i + 2

    # Combine a UTF-16 surrogate pair into one code point
    if 0xD800 <= code_point <= 0xDBFF and inner.startswith("\\u", i + 6):
        low = _read_hex4(inner, i + 8)
        if low is not None and 0xDC00 <= low <= 0xDFFF:
            combined = 0x10000 + ((code_point - 0xD800) << 10) + (low - 0xDC00)
            return chr(combined), i + 12

    return chr(code_point), i + 6


def _parse_string_content(raw: bytes, config: DecodeConfig) -> str:
    """Decodes the bytes between a string's quotes."""
    # Slices end at ASCII quotes or the buffer end of validated UTF-8
    inner = raw.decode("utf-8")
    if not config.decode_escapes or "\\" not in inner:
        return inner

    result = []
    i = 0
    while True:
        j = inner.find("\\", i)
        if j < 0:
            result.append(inner[i:])
            break
        result.append(inner[i:j])
        char, i = _process_escape_sequence(inner, j)
        result.append(char)

    return "".join(result)


def _complete_number(literal: str) -> tuple[str, bool]:
    """
    Fills in a truncated number literal.

    ``12.`` becomes ``12.0`` and an exponent with no digits gets ``0``.
    Returns the completed literal and whether it denotes a float.
    """
    mantissa, marker, exponent = literal.partition("e")
    if not marker:
        mantissa, marker, exponent = literal.partition("E")

    if mantissa.endswith("."):
        mantissa += "0"
    if marker and not exponent.lstrip("+-"):
        exponent += "0"

    return mantissa + marker + exponent, "." in mantissa or bool(marker)


def _parse_number_content(literal: str) -> int | float | Absent:
    completed, is_float = _complete_number(literal)
    try:
        return float(completed) if is_float else int(completed)
    except ValueError:
        # Bare "-" or an integer past the interpreter's digit limit
        return ABSENT


class OnDemandParser:
    """
    Recursive descent over a structural index.

    Holds the cursor and nesting depth for a single decode call, reading
    token contents from the byte buffer only when a value is materialised.
    Every parse method returns ABSENT rather than raising.
    """

    def __init__(
        self, buf: bytes, offsets: list[Offset], config: DecodeConfig
    ) -> None:
        self.buf = buf
        self.offsets = offsets
        self.config = config
        self.cursor = 0
        self.depth = 0

    def exhausted(self) -> bool:
        return self.cursor >= len(self.offsets)

    def current_byte(self) -> int | None:
        """Returns the byte at the cursor's offset, or None when exhausted."""
        if self.cursor >= len(self.offsets):
            return None
        return self.buf[self.offsets[self.cursor]]

    def position(self) -> Offset:
        if self.cursor >= len(self.offsets):
            return len(self.buf)
        return self.offsets[self.cursor]

    def advance(self) -> None:
        self.cursor += 1

    def parse_value(self) -> DecodeResult:
        """Parses the value introduced by the token under the cursor."""
        byte = self.current_byte()
        if byte is None:
            return ABSENT

        kind = classify(byte)
        if kind is TokenKind.ARRAY:
            return self.parse_array()
        elif kind is TokenKind.OBJECT:
            return self.parse_object()
        elif kind is TokenKind.STRING:
            return self.parse_string()
        elif kind is TokenKind.BOOLEAN:
            return self.parse_boolean()
        elif kind is TokenKind.NULL:
            return self.parse_null()
        elif kind is TokenKind.NUMBER:
            return self.parse_number()
        else:
            return ABSENT

    def _skip_container(self) -> None:
        """Moves the cursor past the container opening at the cursor."""
        depth = 0
        while not self.exhausted():
            byte = self.current_byte()
            if byte in _OPENERS:
                depth += 1
            elif byte in _CLOSERS:
                depth -= 1
            self.advance()
            if depth <= 0:
                break

    def _enter_container(self) -> bool:
        """Consumes an opening bracket, or skips the container if too deep."""
        if self.depth >= self.config.max_depth:
            logger.debug(
                "Dropping container at byte %d: depth limit %d reached",
                self.position(),
                self.config.max_depth,
            )
            self._skip_container()
            return False
        self.advance()
        self.depth += 1
        return True

    def parse_array(self) -> list[JsonValue] | Absent:
        """
        Parses an array, closing it implicitly when the offsets run out.

        Commas are no-ops; tokens that start no value are skipped.
        """
        with ProfileContext("parse_array"):
            if not self._enter_container():
                return ABSENT

            values: list[JsonValue] = []
            while not self.exhausted():
                byte = self.current_byte()
                if byte == CLOSE_BRACKET:
                    self.advance()
                    break
                if byte == COMMA:
                    self.advance()
                    continue

                start = self.cursor
                value = self.parse_value()
                if value is not ABSENT:
                    values.append(value)
                elif self.cursor == start:
                    self.advance()

            self.depth -= 1
            return values

    def _seek_colon(self) -> bool:
        """
        Advances past the next colon.

        Stops without consuming at a closing brace and returns False, which
        drops the key that preceded it.
        """
        while not self.exhausted():
            byte = self.current_byte()
            if byte == COLON:
                self.advance()
                return True
            if byte == CLOSE_BRACE:
                return False
            self.advance()
        return False

    def parse_object(self) -> dict[str, JsonValue] | Absent:
        """
        Parses an object, closing it implicitly when the offsets run out.

        Non-string keys are skipped, keys without a value are dropped and
        the last value wins for duplicate keys.
        """
        with ProfileContext("parse_object"):
            if not self._enter_container():
                return ABSENT

            obj: dict[str, JsonValue] = {}
            while not self.exhausted():
                byte = self.current_byte()
                if byte == CLOSE_BRACE:
                    self.advance()
                    break
                if byte == COMMA:
                    self.advance()
                    continue

                start = self.cursor
                key = self.parse_string() if byte == QUOTE else ABSENT
                if key is ABSENT:
                    if self.cursor == start:
                        self.advance()
                    continue

                if not self._seek_colon():
                    continue

                value = self.parse_value()
                if value is not ABSENT:
                    obj[key] = value

            self.depth -= 1
            return obj

    def parse_string(self) -> str | Absent:
        """
        Parses the string whose opening quote is under the cursor.

        A missing closing quote ends the string at end-of-input. The string
        is consumed as one token covering both of its quote offsets.
        """
        start = self.position()
        if start >= len(self.buf) or self.buf[start] != QUOTE:
            return ABSENT

        end = scan_string(self.buf, start)
        with ProfileContext("parse_string", end - start):
            self.advance()
            if end < len(self.buf) and self.position() == end:
                self.advance()

            raw = self.buf[start + 1 : end]
            if raw == b", ":
                # A separator mistaken for string content
                return ABSENT
            return _parse_string_content(raw, self.config)

    def parse_number(self) -> int | float | Absent:
        start = self.position()
        end = scan_number(self.buf, start)
        with ProfileContext("parse_number", end - start):
            self.advance()
            return _parse_number_content(self.buf[start:end].decode("ascii"))

    def parse_boolean(self) -> bool | Absent:
        """
        Matches ``true`` or ``false`` by prefix.

        A literal cut off by the end of input completes to the boolean it
        is a prefix of.
        """
        pos = self.position()
        head = self.buf[pos : pos + 5]
        self.advance()

        if head.startswith(b"true"):
            return True
        if head.startswith(b"false"):
            return False
        if head and pos + len(head) == len(self.buf):
            if b"true".startswith(head):
                return True
            if b"false".startswith(head):
                return False
        return ABSENT

    def parse_null(self) -> None:
        # Any token starting with "n" decodes as null, spelled right or not
        self.advance()
        return None


def _as_utf8(s: TextInput) -> bytes | None:
    """Returns the UTF-8 bytes of ``s``, or None if it is not valid text."""
    if isinstance(s, str):
        try:
            return s.encode("utf-8")
        except UnicodeEncodeError:
            logger.debug("Input cannot be encoded as UTF-8")
            return None

    if isinstance(s, bytes | bytearray | memoryview):
        buf = bytes(s)
        try:
            buf.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Input is not valid UTF-8")
            return None
        return buf

    raise TypeError(
        f"the JSON object must be str or bytes, not {type(s).__name__}"
    )


class OptimisticDecoder:
    """
    Reusable optimistic decoder.

    The offset list is kept between calls so its storage is reused. One
    instance must not be used from several threads at once.
    """

    def __init__(self, config: DecodeConfig | None = None) -> None:
        self.config = config if config is not None else DecodeConfig()
        self._offsets: list[Offset] = []

    def decode(self, s: TextInput) -> DecodeResult:
        """
        Decodes the first value in ``s``.

        Returns ABSENT when ``s`` is not valid text or its first structural
        token starts no value. Anything after the first value is ignored.
        """
        buf = _as_utf8(s)
        if buf is None:
            return ABSENT

        offsets = index_structural(buf, self._offsets)
        parser = OnDemandParser(buf, offsets, self.config)
        result = parser.parse_value()

        if result is ABSENT:
            logger.debug(
                "No value decoded from %d bytes (%d structural offsets)",
                len(buf),
                len(offsets),
            )
        return result


def decode(s: TextInput, **kwargs: Any) -> DecodeResult:
    """
    Decodes possibly incomplete JSON text into Python objects.

    Keyword arguments build the DecodeConfig for this call.
    """
    config = DecodeConfig(**kwargs)
    return OptimisticDecoder(config).decode(s)


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> DecodeResult:
    """
    Decodes the whole content of a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return decode(fp.read(), **kwargs)


__all__ = [
    "ABSENT",
    "DEFAULT_MAX_DEPTH",
    "Absent",
    "DecodeConfig",
    "DecodeResult",
    "HotPathStats",
    "JsonValue",
    "OnDemandParser",
    "OptimisticDecoder",
    "TextInput",
    "TokenKind",
    "classify",
    "clear_hot_path_stats",
    "decode",
    "disable_profiling",
    "enable_profiling",
    "get_hot_path_stats",
    "index_structural",
    "load",
]
