"""Per-language token classification for syntax highlighting.

The scanner is a single left-to-right pass over one line with one pending
accumulator and an explicit ``ScanState``. Priority is fixed: comment
start, then quote, then identifier/number accumulation. Comments always
run to end of line; there is no ``*/`` detection.

Known edge case: a closing quote is recognised by looking at the one
character before it only, so ``"a\\\\"`` (an escaped backslash right
before the quote) does not terminate the string and the token runs on.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

QUOTE_CHARS = ('"', "'", '`')


class TokenType(Enum):
    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    TYPE = "type"
    NORMAL = "normal"


class ScanState(Enum):
    NORMAL = "normal"
    COMMENT = "comment"
    STRING = "string"


Token = tuple[str, TokenType]


@dataclass(frozen=True)
class LanguageProfile:
    """Keyword/type/comment configuration for one language."""
    name: str
    extensions: frozenset[str] = frozenset()
    keywords: frozenset[str] = frozenset()
    types: frozenset[str] = frozenset()
    comment_markers: tuple[str, ...] = ()

    @property
    def is_plain(self) -> bool:
        return not (self.keywords or self.types or self.comment_markers)

    def comment_marker_at(self, ch: str, next_ch: Optional[str]) -> Optional[str]:
        """Return the comment marker starting at ``ch``, if any."""
        for marker in self.comment_markers:
            if marker[0] != ch:
                continue
            if len(marker) == 1 or marker[1] == next_ch:
                return marker
        return None


PLAIN = LanguageProfile(name="plain")

RUST = LanguageProfile(
    name="rust",
    extensions=frozenset({"rs"}),
    keywords=frozenset({
        "fn", "let", "mut", "const", "static", "if", "else", "match", "for", "while",
        "loop", "break", "continue", "return", "struct", "enum", "trait", "impl", "pub",
        "use", "mod", "crate", "self", "super", "as", "move", "ref", "unsafe", "async",
        "await", "dyn", "where", "type", "in",
    }),
    types=frozenset({
        "i8", "i16", "i32", "i64", "i128", "isize", "u8", "u16", "u32", "u64", "u128",
        "usize", "f32", "f64", "bool", "char", "str", "String", "Vec", "Option", "Result",
        "Box", "Rc", "Arc", "Cell", "RefCell",
    }),
    comment_markers=("//", "/*"),
)

PYTHON = LanguageProfile(
    name="python",
    extensions=frozenset({"py"}),
    keywords=frozenset({
        "def", "class", "if", "elif", "else", "for", "while", "break", "continue",
        "return", "try", "except", "finally", "with", "as", "import", "from", "pass",
        "raise", "assert", "lambda", "yield", "async", "await", "global", "nonlocal",
        "True", "False", "None", "and", "or", "not", "in", "is",
    }),
    comment_markers=("#",),
)

JAVASCRIPT = LanguageProfile(
    name="javascript",
    extensions=frozenset({"js", "jsx", "ts", "tsx"}),
    keywords=frozenset({
        "function", "const", "let", "var", "if", "else", "for", "while", "break",
        "continue", "return", "class", "extends", "super", "this", "new", "try", "catch",
        "finally", "throw", "async", "await", "import", "export", "from", "default",
        "switch", "case", "typeof", "instanceof", "delete", "void", "yield",
    }),
    comment_markers=("//", "/*"),
)

C = LanguageProfile(
    name="c",
    extensions=frozenset({"c", "h", "cpp", "hpp", "cc"}),
    keywords=frozenset({
        "int", "char", "float", "double", "void", "struct", "union", "enum", "if",
        "else", "for", "while", "do", "break", "continue", "return", "switch", "case",
        "default", "sizeof", "typedef", "static", "const", "extern", "auto", "register",
        "volatile", "unsigned", "signed", "long", "short",
    }),
    types=frozenset({
        "int", "char", "float", "double", "void", "size_t", "uint8_t", "uint16_t", "uint32_t",
    }),
    comment_markers=("//", "/*"),
)

BASH = LanguageProfile(
    name="bash",
    extensions=frozenset({"sh", "bash"}),
    keywords=frozenset({
        "if", "then", "else", "elif", "fi", "for", "while", "do", "done", "case",
        "esac", "function", "return", "exit", "break", "continue", "local", "export",
        "source", "alias", "echo", "read", "test",
    }),
    comment_markers=("#",),
)

PROFILES: tuple[LanguageProfile, ...] = (RUST, PYTHON, JAVASCRIPT, C, BASH, PLAIN)


def profile_for_extension(extension: str) -> LanguageProfile:
    ext = extension.lower().lstrip('.')
    for profile in PROFILES:
        if ext in profile.extensions:
            return profile
    return PLAIN


def profile_for_filename(filename: Optional[str]) -> LanguageProfile:
    """Pick a profile from a file name's extension, defaulting to plain."""
    if not filename:
        return PLAIN
    _, ext = os.path.splitext(filename)
    return profile_for_extension(ext)


class TokenClassifier:
    """Splits lines into (text, TokenType) tokens for one profile."""

    def __init__(self, profile: LanguageProfile = PLAIN):
        self.profile = profile

    def classify_word(self, word: str) -> TokenType:
        if word in self.profile.types:
            return TokenType.TYPE
        if word in self.profile.keywords:
            return TokenType.KEYWORD
        if all(c.isdigit() or c == '.' for c in word):
            return TokenType.NUMBER
        return TokenType.NORMAL

    def tokenize(self, line: str) -> list[Token]:
        if self.profile.is_plain:
            return [(line, TokenType.NORMAL)]

        tokens: list[Token] = []
        pending = ""
        state = ScanState.NORMAL
        quote = ''
        i = 0
        n = len(line)

        while i < n:
            ch = line[i]
            next_ch = line[i + 1] if i + 1 < n else None

            if state is ScanState.NORMAL:
                marker = self.profile.comment_marker_at(ch, next_ch)
                if marker is not None:
                    if pending:
                        tokens.append((pending, self.classify_word(pending)))
                    pending = marker
                    state = ScanState.COMMENT
                    i += len(marker)
                    continue

            if state is ScanState.COMMENT:
                pending += ch
                i += 1
                continue

            if state is ScanState.NORMAL and ch in QUOTE_CHARS:
                if pending:
                    tokens.append((pending, self.classify_word(pending)))
                pending = ch
                quote = ch
                state = ScanState.STRING
                i += 1
                continue

            if state is ScanState.STRING:
                pending += ch
                if ch == quote and pending[-2] != '\\':
                    tokens.append((pending, TokenType.STRING))
                    pending = ""
                    state = ScanState.NORMAL
                i += 1
                continue

            if ch.isalnum() or ch == '_':
                pending += ch
            else:
                if pending:
                    tokens.append((pending, self.classify_word(pending)))
                    pending = ""
                tokens.append((ch, TokenType.NORMAL))
            i += 1

        if pending:
            if state is ScanState.COMMENT:
                tokens.append((pending, TokenType.COMMENT))
            elif state is ScanState.STRING:
                tokens.append((pending, TokenType.STRING))
            else:
                tokens.append((pending, self.classify_word(pending)))

        return tokens
