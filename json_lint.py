# json_lint.py
# Hand-rolled JSON grammar validator (lint only, no value model)
#
# =============================================================================
#  VALIDATOR IMPLEMENTATION: RECURSIVE DESCENT OVER A BYTE CURSOR
# =============================================================================
#
# Answers one question: is this buffer syntactically valid JSON? Nothing is
# decoded. Numbers stay digits, strings stay escaped, and no containers are
# built, so the only memory cost is the recursion itself [ECMA-404, 2nd ed.].
#
# Design Rationale:
# 1. One matcher per grammar production (value, object, array, string,
#    number). Each matcher has three outcomes:
#       True            - production recognised, cursor moved past it
#       False           - lead token absent, cursor untouched, try the next
#       MalformedJSON   - lead token present but the rest is broken
#    The third outcome is an exception so the first offset raised is the one
#    the caller sees; enclosing matchers never get a chance to overwrite it.
# 2. The cursor walks an explicit-length buffer. There is no terminating
#    sentinel byte, so every peek is bounds-checked.
# 3. Runs of whitespace, digits and plain string content are consumed with
#    precompiled byte regexes rather than per-byte loops.
#
# Depth guard defaults to 256 nested containers. Each level costs two Python
# frames (value + container), which keeps a default-limit interpreter well
# clear of RecursionError [RFC 8259 section 9].
#
# Known looseness:
#   - "1." and "9.e5" pass; digits after the decimal point are optional.
#   - An empty buffer (zero bytes) is reported as valid.
#   - Raw control characters inside strings are accepted.
#
# =============================================================================
#  REFERENCES
# =============================================================================
# [1] ECMA-404 - The JSON Data Interchange Syntax, 2nd edition
# [2] RFC 8259 - The JavaScript Object Notation (JSON) standard
# =============================================================================

import argparse
import logging
import re
import sys
from typing import List, NamedTuple, Optional, Union

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256   # Nested containers allowed before NestingTooDeep

EOF = -1                    # Cursor.peek() past the end of the buffer

_QUOTE     = ord('"')
_MINUS     = ord("-")
_ZERO      = ord("0")
_DOT       = ord(".")
_COMMA     = ord(",")
_COLON     = ord(":")
_LBRACE    = ord("{")
_RBRACE    = ord("}")
_LBRACKET  = ord("[")
_RBRACKET  = ord("]")
_UNICODE   = ord("u")

_DIGITS      = frozenset(b"0123456789")
_ESCAPES     = frozenset(b'"\\/bfnrtu')
_EXPONENT    = frozenset(b"eE")
_SIGNS       = frozenset(b"+-")

# Checked in this order by the value dispatcher.
_LITERALS = (b"false", b"true", b"null")

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
# Each pattern matches the empty string, so .match() never returns None and
# .end() is always the next position to look at.
_WHITESPACE_RUN = re.compile(rb"[ \t\n\r]*")
_DIGIT_RUN      = re.compile(rb"[0-9]*")
_STRING_RUN     = re.compile(rb'[^"\\]*')
_HEX4           = re.compile(rb"[0-9a-fA-F]{4}")

Buffer = Union[bytes, bytearray, memoryview]


# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class MalformedJSON(SyntaxError):
    """
    Grammar violation at a byte offset.

    ``reason`` is the short description, ``pos`` the 0-based offset of the
    first byte that could not be accepted. The message reads
    "<reason> at offset <pos>", the same shape the CLI prints.
    """

    def __init__(self, reason: str, pos: int):
        super().__init__(f"{reason} at offset {pos}")
        self.reason = reason
        self.pos = pos


class NestingTooDeep(MalformedJSON):
    """Raised when an object or array opens past the configured max_depth."""


# ---------------------------------------------------------------------------
# RESULT RECORD
# ---------------------------------------------------------------------------
class ValidationResult(NamedTuple):
    """
    Outcome of validate(): (valid, error_offset, reason).

    Both error fields are None for valid input.
    """
    valid: bool
    error_offset: Optional[int] = None
    reason: Optional[str] = None


# ---------------------------------------------------------------------------
# CURSOR
# ---------------------------------------------------------------------------
class Cursor:
    """
    Forward-only read position over an immutable buffer.

    Exactly one cursor exists per validation call. It never moves backwards:
    once a production has consumed its lead token it either completes or
    raises.
    """
    __slots__ = ("buf", "pos", "end")

    def __init__(self, buf: Buffer):
        self.buf = buf
        self.pos = 0
        self.end = len(buf)

    def at_end(self) -> bool:
        return self.pos >= self.end

    def peek(self) -> int:
        if self.pos < self.end:
            return self.buf[self.pos]
        return EOF

    def startswith(self, literal: bytes) -> bool:
        return self.buf[self.pos:self.pos + len(literal)] == literal

    def skip(self, pattern) -> None:
        self.pos = pattern.match(self.buf, self.pos).end()

    def skip_whitespace(self) -> None:
        self.skip(_WHITESPACE_RUN)


# ---------------------------------------------------------------------------
# STRING MATCHER
# ---------------------------------------------------------------------------
def _match_string(cur: Cursor) -> bool:
    """
    Recognise a quoted string, checking escape syntax only.

    Unterminated strings fail at the end of the buffer. Bad escapes fail at
    the character after the backslash; bad \\u escapes fail at the start of
    the four-digit window.
    """
    if cur.peek() != _QUOTE:
        return False
    cur.pos += 1

    while True:
        cur.skip(_STRING_RUN)
        ch = cur.peek()
        if ch == _QUOTE:
            cur.pos += 1
            return True
        if ch == EOF:
            raise MalformedJSON("unterminated string", cur.end)

        # ch is a backslash
        cur.pos += 1
        esc = cur.peek()
        if esc == EOF:
            raise MalformedJSON("unterminated string", cur.end)
        if esc not in _ESCAPES:
            raise MalformedJSON(f"invalid escape \\{chr(esc)}", cur.pos)
        cur.pos += 1
        if esc == _UNICODE:
            if not _HEX4.match(cur.buf, cur.pos):
                raise MalformedJSON("invalid \\u escape, expected 4 hex digits", cur.pos)
            cur.pos += 4


# ---------------------------------------------------------------------------
# NUMBER MATCHER
# ---------------------------------------------------------------------------
def _match_number(cur: Cursor) -> bool:
    """
    -?(0|[1-9][0-9]*)(\\.[0-9]*)?([eE][+-]?[0-9]+)?

    The fraction accepts zero digits. A digit after a leading zero is left
    for the caller, which rejects it as unexpected text.
    """
    ch = cur.peek()
    if ch != _MINUS and ch not in _DIGITS:
        return False

    if ch == _MINUS:
        cur.pos += 1
        ch = cur.peek()
        if ch not in _DIGITS:
            raise MalformedJSON("expected digit after '-'", cur.pos)
    cur.pos += 1
    if ch != _ZERO:
        cur.skip(_DIGIT_RUN)

    if cur.peek() == _DOT:
        cur.pos += 1
        cur.skip(_DIGIT_RUN)

    if cur.peek() in _EXPONENT:
        cur.pos += 1
        if cur.peek() in _SIGNS:
            cur.pos += 1
        if cur.peek() not in _DIGITS:
            raise MalformedJSON("expected exponent digits", cur.pos)
        cur.skip(_DIGIT_RUN)
    return True


# ---------------------------------------------------------------------------
# LITERAL MATCHER
# ---------------------------------------------------------------------------
def _match_literal(cur: Cursor) -> bool:
    for literal in _LITERALS:
        if cur.startswith(literal):
            cur.pos += len(literal)
            return True
    return False


# ---------------------------------------------------------------------------
# ARRAY MATCHER
# ---------------------------------------------------------------------------
def _match_array(cur: Cursor, depth: int, max_depth: int) -> bool:
    """
    Recognise [ value (, value)* ] or [].

    A comma must be followed by another element, so [1,] fails at the ].
    """
    if cur.peek() != _LBRACKET:
        return False
    if depth >= max_depth:
        raise NestingTooDeep(f"nesting deeper than {max_depth} levels", cur.pos)
    cur.pos += 1
    cur.skip_whitespace()

    if cur.peek() == _RBRACKET:
        cur.pos += 1
        return True

    while True:
        _match_value(cur, depth + 1, max_depth)
        cur.skip_whitespace()
        ch = cur.peek()
        if ch == _RBRACKET:
            cur.pos += 1
            return True
        if ch != _COMMA:
            raise MalformedJSON("expected ',' or ']'", cur.pos)
        cur.pos += 1
        cur.skip_whitespace()


# ---------------------------------------------------------------------------
# OBJECT MATCHER
# ---------------------------------------------------------------------------
def _match_object(cur: Cursor, depth: int, max_depth: int) -> bool:
    """
    Recognise { string : value (, string : value)* } or {}.

    Keys go through the string matcher, so a missing quote is reported
    here and a bad escape inside the key is reported by the string matcher.
    """
    if cur.peek() != _LBRACE:
        return False
    if depth >= max_depth:
        raise NestingTooDeep(f"nesting deeper than {max_depth} levels", cur.pos)
    cur.pos += 1
    cur.skip_whitespace()

    if cur.peek() == _RBRACE:
        cur.pos += 1
        return True

    while True:
        if not _match_string(cur):
            raise MalformedJSON("expected string key", cur.pos)
        cur.skip_whitespace()
        if cur.peek() != _COLON:
            raise MalformedJSON("expected ':'", cur.pos)
        cur.pos += 1
        cur.skip_whitespace()
        _match_value(cur, depth + 1, max_depth)
        cur.skip_whitespace()
        ch = cur.peek()
        if ch == _RBRACE:
            cur.pos += 1
            return True
        if ch != _COMMA:
            raise MalformedJSON("expected ',' or '}'", cur.pos)
        cur.pos += 1
        cur.skip_whitespace()


# ---------------------------------------------------------------------------
# VALUE DISPATCHER
# ---------------------------------------------------------------------------
_CONTAINER_MATCHERS = (_match_object, _match_array)
_SCALAR_MATCHERS = (_match_string, _match_number, _match_literal)


def _match_value(cur: Cursor, depth: int, max_depth: int) -> None:
    """
    Try each production in fixed order and stop at the first that applies.

    Containers come first because they recurse and need the depth budget.
    A MalformedJSON from any matcher passes straight through.
    """
    for matcher in _CONTAINER_MATCHERS:
        if matcher(cur, depth, max_depth):
            return
    for matcher in _SCALAR_MATCHERS:
        if matcher(cur):
            return
    raise MalformedJSON("expected a value", cur.pos)


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def _as_buffer(data) -> Buffer:
    if isinstance(data, (bytes, bytearray)):
        return data
    if isinstance(data, memoryview):
        # Offsets and peeks assume one unsigned byte per item.
        if data.format != "B" or data.ndim != 1:
            return data.cast("B")
        return data
    if isinstance(data, str):
        try:
            return data.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"str input is not encodable as UTF-8: {exc.reason} at index {exc.start}") from None
    raise TypeError(f"expected bytes-like object or str, got {type(data).__name__}")


def check(data, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> None:
    """
    Validate JSON text, raising MalformedJSON at the first violation.

    Any JSON value is accepted at the root. Leading and trailing whitespace
    is allowed; anything else after the root value is rejected. A zero-length
    buffer passes.
    """
    if not isinstance(max_depth, int) or max_depth < 0:
        raise ValueError(f"max_depth must be a non-negative integer, got {max_depth!r}")
    buf = _as_buffer(data)
    log.debug("validating %d bytes (max_depth=%d)", len(buf), max_depth)

    if len(buf) == 0:
        return

    cur = Cursor(buf)
    cur.skip_whitespace()
    try:
        _match_value(cur, 0, max_depth)
    except RecursionError:
        # max_depth above what the interpreter stack can hold
        raise NestingTooDeep("nesting exceeds the interpreter recursion limit", cur.pos) from None
    cur.skip_whitespace()
    if not cur.at_end():
        raise MalformedJSON("extra data after root value", cur.pos)


def validate(data, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> ValidationResult:
    """
    Validate JSON text and report the verdict as a ValidationResult.

    On failure error_offset is the byte offset of the earliest violation,
    relative to the start of data (of its UTF-8 encoding for str input).
    """
    try:
        check(data, max_depth=max_depth)
    except MalformedJSON as exc:
        log.debug("invalid JSON: %s", exc)
        return ValidationResult(False, exc.pos, exc.reason)
    return ValidationResult(True)


def is_valid(data, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> bool:
    return validate(data, max_depth=max_depth).valid


# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as fh:
        return fh.read()


def _cli(argv: List[str]) -> int:
    """
    Command-line interface for validation runs.

    Exit code 0 on valid input, 1 on a grammar violation, for build and
    hook integration.
    """
    ap = argparse.ArgumentParser(description="JSON grammar validator (ECMA-404)")
    ap.add_argument("file", help="JSON file to check, or - for stdin")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT,
                    help=f"maximum container nesting (default: {DEPTH_LIMIT_DEFAULT})")
    ap.add_argument("--debug", action="store_true", help="log validator progress to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.max_depth < 0:
        ap.error("--max-depth must be non-negative")

    data = _read_input(args.file)
    try:
        check(data, max_depth=args.max_depth)
    except MalformedJSON as exc:
        print(f"SyntaxError: {exc}", file=sys.stderr)
        return 1
    print("OK")
    return 0


def main() -> int:
    return _cli(sys.argv[1:])


__all__ = [
    "DEPTH_LIMIT_DEFAULT",
    "Cursor",
    "MalformedJSON",
    "NestingTooDeep",
    "ValidationResult",
    "check",
    "is_valid",
    "validate",
    "main",
]

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
