"""
ECMAScript Module Host (Lexer, Parser & Printer).

Locates static ``import`` declarations in JavaScript/TypeScript source and
rewrites those that reference configured barrel libraries. Everything outside
the matched declarations is preserved byte for byte.

Capabilities:
1.  **Tokenization**: Regex-based lexer that understands comments, string and
    template literals so that ``import`` inside them is never matched.
2.  **Declaration Parsing**: Default, namespace, named and mixed clauses, plus
    bare side-effect imports. Dynamic ``import()``, ``import.meta`` and
    TypeScript ``import type`` declarations are left alone.
3.  **Printing**: Replacements keep the original quote style, semicolon and
    indentation.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

from barrel_rewriter.core.models import ImportSpecifier, ImportStatement
from barrel_rewriter.enums import SourceLanguage, SpecifierKind
from barrel_rewriter.hosts.base import SourceHost


class TokenKind(Enum):
  """Enumeration of ECMAScript token types relevant to import declarations."""

  COMMENT = auto()  # // ... or /* ... */
  STRING = auto()  # '...' or "..."
  TEMPLATE = auto()  # `...`
  WORD = auto()  # Identifiers, keywords, numbers
  PUNCT = auto()  # Any other single character
  WHITESPACE = auto()
  EOF = auto()


@dataclass
class Token:
  """A lexical unit with its absolute character span."""

  kind: TokenKind
  text: str
  start: int
  end: int
  line: int


class EcmaScriptLexer:
  """
  Regex-based tokenizer for ECMAScript source code.
  """

  # Order matters: Specific patterns before general ones
  PATTERNS = [
    (TokenKind.COMMENT, r"//[^\n]*|/\*.*?\*/"),
    (TokenKind.STRING, r"'(?:\\.|[^'\\\n])*'|\"(?:\\.|[^\"\\\n])*\""),
    (TokenKind.TEMPLATE, r"`(?:\\.|[^`\\])*`"),
    (TokenKind.WORD, r"(?:[^\W\d]|\$)[\w$]*|\d[\w.]*"),
    (TokenKind.WHITESPACE, r"\s+"),
    (TokenKind.PUNCT, r"."),
  ]

  _REGEX = re.compile(
    "|".join(f"(?P<{kind.name}>{pattern})" for kind, pattern in PATTERNS),
    re.DOTALL,
  )

  def __init__(self, text: str):
    self.text = text

  def tokenize(self) -> List[Token]:
    """
    Converts the full string into a list of Tokens, filtering whitespace/comments.

    Newlines are tracked through ``Token.line`` so the parser can detect
    statement starts after automatic semicolon insertion.
    """
    tokens: List[Token] = []
    line = 1
    for match in self._REGEX.finditer(self.text):
      kind = TokenKind[match.lastgroup]
      text = match.group(0)
      if kind not in (TokenKind.WHITESPACE, TokenKind.COMMENT):
        tokens.append(Token(kind, text, match.start(), match.end(), line))
      line += text.count("\n")
    tokens.append(Token(TokenKind.EOF, "", len(self.text), len(self.text), line))
    return tokens


@dataclass
class ImportDeclaration:
  """
  A parsed static import declaration and its location in the source.

  Attributes:
      statement: The language-neutral statement.
      start: Offset of the ``import`` keyword.
      end: Offset just past the declaration (including ``;`` if present).
      quote: Quote character used for the module specifier.
      semicolon: Whether the declaration was terminated by ``;``.
  """

  statement: ImportStatement
  start: int
  end: int
  quote: str
  semicolon: bool


class _Unsupported(Exception):
  """Raised internally when a declaration is outside the supported subset."""


class ImportDeclarationParser:
  """
  Finds static import declarations in a token stream.

  This is not a general-purpose ECMAScript parser: it recognizes ``import``
  at statement starts and parses only the declaration that follows.
  """

  def __init__(self, text: str):
    self.text = text
    self.tokens = EcmaScriptLexer(text).tokenize()
    self.pos = 0

  def parse(self) -> List[ImportDeclaration]:
    """
    Main entry point.

    Returns:
        List[ImportDeclaration]: Declarations in source order.
    """
    found: List[ImportDeclaration] = []
    prev: Optional[Token] = None

    while not self._is_eof():
      token = self._peek()
      if token.kind is TokenKind.WORD and token.text == "import" and self._at_statement_start(prev, token):
        start_pos = self.pos
        try:
          decl = self._parse_declaration()
        except _Unsupported:
          decl = None
        if decl is not None:
          found.append(decl)
          prev = self.tokens[self.pos - 1]
          continue
        self.pos = start_pos

      prev = self._consume()

    return found

  # --- Parser Primitives ---

  def _peek(self, offset: int = 0) -> Token:
    idx = self.pos + offset
    if idx >= len(self.tokens):
      return self.tokens[-1]
    return self.tokens[idx]

  def _consume(self) -> Token:
    token = self._peek()
    self.pos += 1
    return token

  def _is_eof(self) -> bool:
    return self._peek().kind is TokenKind.EOF

  def _is_punct(self, text: str, offset: int = 0) -> bool:
    token = self._peek(offset)
    return token.kind is TokenKind.PUNCT and token.text == text

  def _is_word(self, text: Optional[str] = None, offset: int = 0) -> bool:
    token = self._peek(offset)
    return token.kind is TokenKind.WORD and (text is None or token.text == text)

  def _expect_punct(self, text: str) -> Token:
    if not self._is_punct(text):
      raise _Unsupported()
    return self._consume()

  def _expect_word(self, text: Optional[str] = None) -> Token:
    if not self._is_word(text):
      raise _Unsupported()
    return self._consume()

  @staticmethod
  def _at_statement_start(prev: Optional[Token], token: Token) -> bool:
    if prev is None:
      return True
    if prev.kind is TokenKind.PUNCT and prev.text in (";", "}"):
      return True
    return prev.line < token.line and not (prev.kind is TokenKind.PUNCT and prev.text == ".")

  # --- Declaration Grammar ---

  def _parse_declaration(self) -> Optional[ImportDeclaration]:
    keyword = self._expect_word("import")

    # import(...) / import.meta
    if self._is_punct("(") or self._is_punct("."):
      return None

    # import type { X } from 'm' / import type X from 'm' (but not `import type from 'm'`)
    if self._is_word("type") and not (self._is_word("from", 1) or self._is_punct(",", 1)):
      return None

    specifiers: List[ImportSpecifier] = []
    if self._peek().kind is not TokenKind.STRING:
      specifiers = self._parse_clause()
      self._expect_word("from")

    source_token = self._peek()
    if source_token.kind is not TokenKind.STRING:
      raise _Unsupported()
    self._consume()

    # Import attributes (`with { type: 'json' }`) are left untouched.
    if self._is_word("with") or self._is_word("assert"):
      if self._peek().line == source_token.line:
        return None

    end = source_token.end
    semicolon = False
    if self._is_punct(";"):
      end = self._consume().end
      semicolon = True

    statement = ImportStatement(module_source=source_token.text[1:-1], specifiers=tuple(specifiers))
    return ImportDeclaration(statement, keyword.start, end, source_token.text[0], semicolon)

  def _parse_clause(self) -> List[ImportSpecifier]:
    specifiers: List[ImportSpecifier] = []

    if self._is_word():
      specifiers.append(ImportSpecifier.default(self._consume().text))
      if not self._is_punct(","):
        return specifiers
      self._consume()

    if self._is_punct("*"):
      self._consume()
      self._expect_word("as")
      specifiers.append(ImportSpecifier.namespace(self._expect_word().text))
    elif self._is_punct("{"):
      specifiers.extend(self._parse_named_list())
    else:
      raise _Unsupported()

    return specifiers

  def _parse_named_list(self) -> List[ImportSpecifier]:
    self._expect_punct("{")
    specifiers: List[ImportSpecifier] = []

    while not self._is_punct("}"):
      # `{ type Foo }` marks a type-only specifier; leave such declarations alone.
      if self._is_word("type") and (self._is_word(offset=1) and not self._is_word("as", 1)):
        raise _Unsupported()

      token = self._consume()
      if token.kind is TokenKind.STRING:
        imported = token.text[1:-1]
      elif token.kind is TokenKind.WORD:
        imported = token.text
      else:
        raise _Unsupported()

      local = imported
      if self._is_word("as"):
        self._consume()
        local = self._expect_word().text
      elif token.kind is TokenKind.STRING:
        raise _Unsupported()

      if imported == "default":
        specifiers.append(ImportSpecifier.default(local))
      else:
        specifiers.append(ImportSpecifier.named(imported, local))

      if self._is_punct(","):
        self._consume()
      elif not self._is_punct("}"):
        raise _Unsupported()

    self._expect_punct("}")
    return specifiers


_IDENTIFIER_RE = re.compile(r"(?:[^\W\d]|\$)[\w$]*")


def _is_identifier(name: str) -> bool:
  return _IDENTIFIER_RE.fullmatch(name) is not None


def render_statement(statement: ImportStatement, quote: str = "'", semicolon: bool = True) -> str:
  """
  Prints a single-specifier statement as an ECMAScript import declaration.

  Args:
      statement: Replacement produced by the engine.
      quote: Quote character for the module specifier.
      semicolon: Whether to terminate with ``;``.

  Returns:
      str: e.g. ``import Grid from 'react-bootstrap/lib/Grid';``.
  """
  spec = statement.specifiers[0]
  if spec.kind is SpecifierKind.DEFAULT:
    clause = spec.local_name
  elif spec.kind is SpecifierKind.NAMESPACE:
    clause = f"* as {spec.local_name}"
  else:
    imported = spec.imported_name or spec.local_name
    if not _is_identifier(imported):
      # String export names must always be bound with `as`.
      clause = f"{{ '{imported}' as {spec.local_name} }}"
    elif spec.is_aliased:
      clause = f"{{ {imported} as {spec.local_name} }}"
    else:
      clause = f"{{ {imported} }}"

  source = statement.module_source.replace("\\", "\\\\").replace(quote, f"\\{quote}")
  return f"import {clause} from {quote}{source}{quote}{';' if semicolon else ''}"


class EcmaScriptHost(SourceHost):
  """
  Host for JavaScript and TypeScript modules.
  """

  language = SourceLanguage.ECMASCRIPT

  def parse(self, code: str) -> List[ImportDeclaration]:
    return ImportDeclarationParser(code).parse()

  def _rewrite(self, code: str, errors: List[str]) -> Tuple[str, int]:
    pieces: List[str] = []
    cursor = 0
    rewritten = 0

    for decl in self.parse(code):
      result = self.engine.plan(decl.statement)
      if result is None or result.is_passthrough:
        continue
      if not result.ok:
        self._handle_failure(result, errors)
        continue

      separator = "\n" + self._indentation(code, decl.start)
      rendered = separator.join(render_statement(stmt, decl.quote, decl.semicolon) for stmt in result.replacements)
      pieces.append(code[cursor : decl.start])
      pieces.append(rendered)
      cursor = decl.end
      rewritten += 1

    pieces.append(code[cursor:])
    return "".join(pieces), rewritten

  @staticmethod
  def _indentation(code: str, offset: int) -> str:
    line_start = code.rfind("\n", 0, offset) + 1
    prefix = code[line_start:offset]
    return prefix if not prefix.strip() else ""
