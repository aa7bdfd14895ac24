"""Exception taxonomy for the range-referencing trie.

Only caller-input violations are errors. A duplicate word is not one (it is a
no-op insertion) and a prefix with no completions simply yields an empty list.
"""


class TrieError(Exception):
  """Base class for every error raised by `wordtrie`."""


class PreconditionViolation(TrieError, ValueError):
  """Input rejected before any node is created (empty input, bad word, bad range)."""


class InvariantViolation(TrieError, AssertionError):
  """A structural check found a defect in a built trie."""
