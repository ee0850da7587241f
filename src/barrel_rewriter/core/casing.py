"""
Member Name Casing.

Converts exported member names before they are substituted into a path. Only
the path segment is converted; local bindings keep their original spelling.
"""

import re
from typing import Callable, Dict, List

from barrel_rewriter.enums import CasingMode

# Acronym runs (XMLHttp -> XML, Http), capitalized or lowercase words, digit runs.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def split_words(name: str) -> List[str]:
  """
  Splits an identifier on case boundaries, underscores, hyphens and digits.

  Args:
      name: Identifier such as ``PascalCase``, ``snake_case`` or ``XMLHttpRequest``.

  Returns:
      List[str]: The words in order, with their original casing.
  """
  return _WORD_RE.findall(name)


def to_camel(name: str) -> str:
  words = split_words(name)
  if not words:
    return name
  return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def to_kebab(name: str) -> str:
  words = split_words(name)
  if not words:
    return name
  return "-".join(word.lower() for word in words)


def to_snake(name: str) -> str:
  words = split_words(name)
  if not words:
    return name
  return "_".join(word.lower() for word in words)


_CONVERTERS: Dict[CasingMode, Callable[[str], str]] = {
  CasingMode.CAMEL: to_camel,
  CasingMode.KEBAB: to_kebab,
  CasingMode.SNAKE: to_snake,
}


def convert_name(name: str, mode: CasingMode) -> str:
  """
  Applies the casing mode to a member name.

  Args:
      name: The exported member name.
      mode: Active casing mode. ``CasingMode.NONE`` is the identity.

  Returns:
      str: The converted name.
  """
  converter = _CONVERTERS.get(mode)
  if converter is None:
    return name
  return converter(name)
