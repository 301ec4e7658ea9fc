from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

from .aob import (PatternElement, craft_signature, craft_string,
                  format_signature)

Buffer = Union[bytes, bytearray, memoryview, Sequence[int]]


class Signature:
  """An immutable byte pattern with wildcard positions.

  Build one with :meth:`ida`, :meth:`string`, :meth:`wildcard_string` or
  :meth:`from_bytes`, or pass :class:`PatternElement` objects directly. Search
  methods never copy the buffer and return absolute offsets into it.
  """

  __slots__ = ('_elements',)

  def __init__(self, elements: Iterable[PatternElement]):
    object.__setattr__(self, '_elements', tuple(elements))

  def __setattr__(self, name, value):
    raise AttributeError('Signature is immutable')

  def __reduce__(self):
    return (Signature, (self._elements,))

  @classmethod
  def ida(cls, pattern: Union[str, bytes], wildcard: str = '?') -> 'Signature':
    return cls(craft_signature(pattern, wildcard))

  @classmethod
  def string(cls, text: str, include_terminator: bool = False) -> 'Signature':
    return cls(craft_string(text, include_terminator))

  @classmethod
  def wildcard_string(cls,
                      text: str,
                      wildcard: str,
                      include_terminator: bool = False) -> 'Signature':
    return cls(craft_string(text, include_terminator, wildcard))

  @classmethod
  def from_bytes(cls, data: Buffer) -> 'Signature':
    return cls(PatternElement.literal(b) for b in data)

  @property
  def elements(self) -> Tuple[PatternElement, ...]:
    return self._elements

  def to_ida(self, wildcard: str = '??') -> str:
    return format_signature(self._elements, wildcard)

  def __len__(self):
    return len(self._elements)

  def __iter__(self):
    return iter(self._elements)

  def __eq__(self, other):
    if not isinstance(other, Signature):
      return NotImplemented
    return self._elements == other._elements

  def __hash__(self):
    return hash(self._elements)

  def __str__(self):
    return self.to_ida()

  def __repr__(self):
    return f"Signature.ida('{self.to_ida()}')"

  def _window_matches(self, buffer: Buffer, i: int) -> bool:
    for j, element in enumerate(self._elements):
      if not element.matches(buffer[i + j]):
        return False
    return True

  def _bounds(self, buffer: Buffer, start: int,
              end: Optional[int]) -> Optional[Tuple[int, int]]:
    """Return the first and last window start inside ``buffer[start:end]``."""
    if not self._elements:
      return None
    if end is None or end > len(buffer):
      end = len(buffer)
    if start < 0:
      return None
    last = end - len(self._elements)
    if last < start:
      return None
    return start, last

  def scan(self, buffer: Buffer, start: int = 0,
           end: Optional[int] = None) -> Optional[int]:
    """Offset of the first match, or None."""
    bounds = self._bounds(buffer, start, end)
    if bounds is None:
      return None
    first, last = bounds
    for i in range(first, last + 1):
      if self._window_matches(buffer, i):
        return i
    return None

  def rscan(self, buffer: Buffer, start: int = 0,
            end: Optional[int] = None) -> Optional[int]:
    """Offset of the last match, or None."""
    bounds = self._bounds(buffer, start, end)
    if bounds is None:
      return None
    first, last = bounds
    for i in range(last, first - 1, -1):
      if self._window_matches(buffer, i):
        return i
    return None

  def scan_all(self, buffer: Buffer, start: int = 0,
               end: Optional[int] = None) -> Iterator[int]:
    """Yield the offset of every match in ascending order.

    Overlapping matches are all reported. Each call starts a fresh scan.
    """
    bounds = self._bounds(buffer, start, end)
    if bounds is None:
      return
    first, last = bounds
    for i in range(first, last + 1):
      if self._window_matches(buffer, i):
        yield i

  def matches(self, buffer: Buffer) -> bool:
    if not self._elements or len(buffer) != len(self._elements):
      return False
    return self._window_matches(buffer, 0)
