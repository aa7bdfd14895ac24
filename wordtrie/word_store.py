"""
Immutable word array and the `Range` value type that references into it.

The trie never copies word text. Every node label is a `Range`, an inclusive
`(word_index, start, end)` slice of one word held by a `WordStore`. The store
freezes the caller's sequence into a tuple on construction, so the ranges can
never desynchronize from the text they point at.

Conventions
-----------
- Words must be non-empty, lowercase `str` values. No normalization is done;
  anything else is rejected with `PreconditionViolation`.
- Duplicates are allowed in the store. How the trie treats them is the trie's
  business (a duplicate insert is a no-op).
"""
from typing import NamedTuple

from .errors import PreconditionViolation


class Range(NamedTuple):
  """Inclusive slice `words[word_index][start:end + 1]`."""
  word_index: int
  start: int
  end: int

  @property
  def length(self):
    return self.end - self.start + 1

  def __str__(self):
    return f"({self.word_index},{self.start},{self.end})"


class WordStore:
  __slots__ = ("_words", )

  def __init__(self, words):
    if isinstance(words, WordStore):
      self._words = words._words
      return
    if isinstance(words, str):
      raise PreconditionViolation("WordStore expects a sequence of words, not a single str")

    items = tuple(words)
    if not items:
      raise PreconditionViolation("WordStore requires at least one word")
    for i, w in enumerate(items):
      self._check_word(i, w)
    self._words = items


  @staticmethod
  def _check_word(i, w):
    if not isinstance(w, str):
      raise PreconditionViolation(f"word {i} is {type(w).__name__}, expected str")
    if not w:
      raise PreconditionViolation(f"word {i} is empty")
    if w != w.lower():
      raise PreconditionViolation(f"word {i} ({w!r}) is not lowercase")


  def __len__(self):
    return len(self._words)

  def __getitem__(self, index):
    return self._words[index]

  def __iter__(self):
    return iter(self._words)

  def __eq__(self, other):
    if isinstance(other, WordStore):
      return self._words == other._words
    return NotImplemented

  def __hash__(self):
    return hash(self._words)

  def __repr__(self):
    return f"WordStore({len(self._words)} words)"


  def full_range(self, word_index, start=0):
    """Range covering `words[word_index]` from `start` to its last character."""
    return self.make_range(word_index, start, len(self._words[word_index]) - 1)


  def make_range(self, word_index, start, end):
    """Build a `Range`, rejecting bounds that break `start <= end < len(word)`."""
    if not 0 <= word_index < len(self._words):
      raise PreconditionViolation(f"word index {word_index} out of bounds")
    n = len(self._words[word_index])
    if not 0 <= start <= end < n:
      raise PreconditionViolation(
        f"range ({word_index},{start},{end}) out of bounds for word of length {n}")
    return Range(word_index, start, end)


  def text(self, rng):
    """Materialize the label of `rng` (diagnostics only; the trie compares in place)."""
    return self._words[rng.word_index][rng.start:rng.end + 1]


  def prefix_through(self, rng):
    """Whole-word prefix ending at `rng.end`, i.e. the root-to-node text."""
    return self._words[rng.word_index][:rng.end + 1]
