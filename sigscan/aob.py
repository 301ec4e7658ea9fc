import re
from typing import Iterable, List, Optional, Union


class SignatureParseError(ValueError):
  def __init__(self, message: str, token: str, index: int):
    super().__init__(f'{message}: {token!r} (token {index})')
    self.token = token
    self.index = index


class PatternElement:
  """One position of a pattern; ``value`` is None for a wildcard."""

  __slots__ = ('value',)

  def __init__(self, value: Optional[int]):
    object.__setattr__(self, 'value', value)

  def __setattr__(self, name, value):
    raise AttributeError('PatternElement is immutable')

  def __reduce__(self):
    return (PatternElement, (self.value,))

  @classmethod
  def literal(cls, byte: int) -> 'PatternElement':
    if not 0 <= byte <= 0xFF:
      raise ValueError(f'byte value out of range: {byte}')
    return cls(byte)

  @classmethod
  def wildcard(cls) -> 'PatternElement':
    return cls(None)

  @property
  def is_wildcard(self) -> bool:
    return self.value is None

  def matches(self, byte: int) -> bool:
    return self.value is None or self.value == byte

  def __eq__(self, other):
    if not isinstance(other, PatternElement):
      return NotImplemented
    return self.value == other.value

  def __hash__(self):
    return hash((PatternElement, self.value))

  def __repr__(self):
    if self.value is None:
      return 'PatternElement(??)'
    return f'PatternElement(0x{self.value:02X})'


WILDCARD = PatternElement(None)


def parse_hex_digit(c: int) -> int:
  if 48 <= c <= 57:
    return c - 48
  if 97 <= c <= 102:
    return c - 97 + 10
  if 65 <= c <= 70:
    return c - 65 + 10
  raise ValueError('hex digit expected')


def check_wildcard(wildcard: str) -> str:
  if not isinstance(wildcard, str) or len(wildcard) != 1:
    raise ValueError(f'wildcard must be a single character, got {wildcard!r}')
  return wildcard


HEX_DIGITS = '0123456789abcdefABCDEF'
ASCII_WHITESPACE = re.compile(r'[ \t\n\r\f]+')


def craft_signature(s: Union[str, bytes],
                    wildcard: str = '?') -> List[PatternElement]:
  """Parse IDA-style hex notation such as ``"48 8B ?? ?? 90"``."""
  check_wildcard(wildcard)
  if wildcard in HEX_DIGITS:
    raise ValueError(f'wildcard cannot be a hex digit, got {wildcard!r}')
  if isinstance(s, (bytes, bytearray)):
    s = s.decode('latin-1')
  tokens = [t for t in ASCII_WHITESPACE.split(s) if t]
  elements = []
  for index, token in enumerate(tokens):
    if token.count(wildcard) == len(token):
      elements.append(WILDCARD)
      continue
    if len(token) != 2:
      raise SignatureParseError('expected two hex digits', token, index)
    current = 0
    for c in token:
      try:
        current = (current << 4) | parse_hex_digit(ord(c))
      except ValueError:
        raise SignatureParseError('hex digit expected', token, index) from None
    elements.append(PatternElement(current))
  return elements


def _char_byte(c: str, index: int) -> int:
  code = ord(c)
  if code > 0xFF:
    raise SignatureParseError('character does not fit in a byte', c, index)
  return code


def craft_string(text: str,
                 include_terminator: bool,
                 wildcard: Optional[str] = None) -> List[PatternElement]:
  if wildcard is not None:
    check_wildcard(wildcard)
  elements = []
  for index, c in enumerate(text):
    if c == wildcard:
      elements.append(WILDCARD)
    else:
      elements.append(PatternElement(_char_byte(c, index)))
  if include_terminator:
    elements.append(PatternElement(0x00))
  return elements


def format_signature(elements: Iterable[PatternElement],
                     wildcard: str = '??') -> str:
  return ' '.join(wildcard if e.value is None else f'{e.value:02X}'
                  for e in elements)
