"""
Compressed Trie over a shared word array, with range-referencing labels.

This module implements a compressed (radix) trie whose node labels are never
copied strings. Each node holds a `Range` -- `(word_index, start, end)` -- into
the `WordStore` the trie was built from, so the whole tree costs a handful of
integers per node regardless of word length.

Key features
------------
- **No copied text**
  - A node's label is `words[word_index][start:end + 1]`. Two nodes may point
    at disjoint slices of the same word.
  - The root-to-node text of any node is `words[word_index][:end + 1]`, which
    is what makes a node a stable reference to a stored word.
- **First-child / sibling links**
  - Children form a singly linked chain: `node.first_child`, then
    `child.sibling`, ... Each node owns its first child and the rest of its
    sibling chain; there are no parent pointers.
- **In-place splitting**
  - Insertion walks siblings comparing from the candidates' shared `start`
    offset, descends through fully matched interior labels, and splits a label
    where the new word diverges partway through it.
- **Iterative traversals**
  - Insertion is a loop and enumeration uses an explicit stack (no recursion).
- **Branch pruning**
  - `iter_completions` skips a whole subtree once its label conflicts with the
    prefix at a shared depth.

Classes
-------
RangeNode
    Node type. Holds `substr` (Range | None for the root), `first_child`,
    `sibling`, and `terminal`, the index of a word that ends at an interior node.
CompressedTrie
    Public API for building and querying the trie.

Public API (high level)
-----------------------
- `build(words)` / `CompressedTrie.build(words)`
    Insert every word in input order and return the trie.
- `single_insert(word_index)`
    Insert one stored word; returns False for a duplicate (a no-op).
- `completions(prefix)` / `iter_completions(prefix, k=None)`
    Word nodes whose text starts with `prefix`.
- `complete_words(prefix, k=None)`
    Same, resolved to strings.
- `search(word)`
    The node representing exactly `word`, else None.
- `count_nodes(get_avg_branch_factor=False)`
    Total node count or average out-degree of internal nodes.
- `render()` / `check_invariants()`
    Diagnostic tree dump / structural self-check.

Conventions & invariants
------------------------
- **Sibling invariant:** no two siblings' labels start with the same character.
- **Leaves are words:** a node without children represents
  `words[substr.word_index]` exactly.
- **Prefix words:** a stored word that is a proper prefix of another ends at an
  interior node; that node's `terminal` holds its index.
- **Duplicates:** re-inserting a word that is already represented changes
  nothing and bumps `duplicates`.
- **Result order:** enumeration follows child order, which depends on insertion
  order. Treat results as a set.
"""
import logging

from . import config as CFG
from .errors import InvariantViolation, PreconditionViolation
from .word_store import Range, WordStore

log = logging.getLogger(__name__)


class RangeNode:
  __slots__ = ("substr", "first_child", "sibling", "terminal")

  def __init__(self, substr=None, first_child=None, sibling=None):
    self.substr = substr
    self.first_child = first_child
    self.sibling = sibling
    self.terminal = None

  @property
  def is_leaf(self):
    return self.first_child is None

  @property
  def is_word(self):
    """True for leaves and for interior nodes where a stored word ends."""
    return self.substr is not None and (self.first_child is None or self.terminal is not None)

  @property
  def word_index(self):
    """Index of the word this node represents, or None."""
    if self.substr is None:
      return None
    if self.first_child is None:
      return self.substr.word_index
    return self.terminal

  def _children(self):
    """Yield children in sibling order."""
    ptr = self.first_child
    while ptr is not None:
      yield ptr
      ptr = ptr.sibling

  def __repr__(self):
    if self.substr is None:
      return "RangeNode(root)"
    return f"RangeNode{self.substr}"


#### ===================================================  ####
#    Compressed Trie over a WordStore
#### ===================================================  ####

class CompressedTrie:
  __slots__ = ("words", "root", "duplicates", "_size")

  def __init__(self, words):
    self.words = WordStore(words)
    self.root = RangeNode()
    self.duplicates = 0
    self._size = 0


  @classmethod
  def build(cls, words):
    """Build a trie by inserting every word of `words`, first to last.

    Parameters
    ----------
    words : WordStore | Sequence[str]
        Non-empty, lowercase words. A plain sequence is frozen into a
        `WordStore`; the trie keeps referencing it afterwards.

    Returns
    -------
    CompressedTrie

    Raises
    ------
    PreconditionViolation
        Empty input, or a non-str, empty or non-lowercase word. Raised before
        any node exists.
    """
    trie = cls(words)
    trie.batch_insert()
    if log.isEnabledFor(logging.INFO):
      log.info("Built trie: words=%d distinct=%d duplicates=%d nodes=%d",
               len(trie.words), len(trie), trie.duplicates, trie.count_nodes())
    return trie


  def batch_insert(self, indexes=None):
    """Insert the given word indexes in order (all of them by default).

    Returns the number of words that were new.
    """
    if indexes is None:
      indexes = range(len(self.words))
    added = 0
    for i in indexes:
      if self.single_insert(i):
        added += 1
    return added


  def _match_len(self, target, rng):
    """Length of the common prefix of `target` and the label of `rng`.

    Comparison starts at `rng.start` in both strings: every candidate at a
    given depth begins at the same offset.
    """
    src = self.words[rng.word_index]
    i = start = rng.start
    stop = min(rng.end + 1, len(target))
    while i < stop and src[i] == target[i]:
      i += 1
    return i - start


  def single_insert(self, word_index):
    """Insert `words[word_index]`, splitting a label where the word diverges.

    - With no candidate match among the siblings, appends a leaf for the
      remaining suffix as the last sibling.
    - On a fully matched interior label, descends to its first child.
    - On a partially matched label, splits it (see `_split`).
    - On a fully matched leaf with characters left over, the leaf becomes an
      interior node terminal for its own word and gains one child.
    - When the word is used up exactly at a node, that node is marked
      terminal; if it already represents a word, the insert is a no-op.

    Returns
    -------
    bool
        True if the word was new, False for a duplicate.
    """
    words = self.words
    if not 0 <= word_index < len(words):
      raise PreconditionViolation(f"word index {word_index} out of bounds")
    target = words[word_index]
    n = len(target)

    node = self.root.first_child
    if node is None:
      self.root.first_child = RangeNode(words.full_range(word_index))
      self._size += 1
      return True

    while True:
      rng = node.substr
      matched = self._match_len(target, rng)

      if matched == 0:
        if node.sibling is not None:
          node = node.sibling
          continue
        node.sibling = RangeNode(words.full_range(word_index, rng.start))
        log.debug("branch: word %d at offset %d", word_index, rng.start)
        break

      if matched < rng.length:
        self._split(node, word_index, matched)
        break

      pos = rng.end + 1
      if pos < n:
        if node.first_child is not None:
          node = node.first_child
          continue
        # leaf is a proper prefix of the target
        node.terminal = rng.word_index
        node.first_child = RangeNode(words.full_range(word_index, pos))
        log.debug("extend: word %d below leaf %s", word_index, rng)
        break

      if node.is_word:
        self.duplicates += 1
        log.debug("duplicate: word %d (%r) already stored", word_index, target)
        return False
      node.terminal = word_index
      break

    self._size += 1
    return True


  def _split(self, node, word_index, matched):
    """Cut `node`'s label after `matched` characters.

    The node keeps the shared part. The cut-off remainder becomes its first
    child and inherits its previous children and terminal mark; the target's
    suffix, if any, becomes the remainder's sibling. A target with no suffix
    left ends at the shortened node instead.
    """
    rng = node.substr
    cut = rng.start + matched

    remainder = RangeNode(Range(rng.word_index, cut, rng.end), first_child=node.first_child)
    remainder.terminal = node.terminal

    node.substr = Range(rng.word_index, rng.start, cut - 1)
    node.first_child = remainder
    node.terminal = None

    if cut < len(self.words[word_index]):
      remainder.sibling = RangeNode(self.words.full_range(word_index, cut))
    else:
      node.terminal = word_index
    log.debug("split: %s -> %s + %s for word %d", rng, node.substr, remainder.substr, word_index)


  def iter_completions(self, prefix, k=None):
    """Iterate over word nodes whose text starts with `prefix`, depth-first.

    Args:
        prefix (str): Prefix to complete ("" enumerates every stored word).
        k (int | None): Optional limit on the number of results.

    Returns:
        Iterator[RangeNode]: leaves, and interior nodes where a stored word ends.

    Raises:
        PreconditionViolation: `prefix` is not a str (raised on the call, not
        on the first `next()`).

    Notes:
        A node's label covers text positions `start..end`. If any of those
        positions also lies inside the prefix and the characters differ, the
        node and its whole subtree are skipped. A word node that survives is a
        completion iff its word is at least as long as the prefix.
    """
    if not isinstance(prefix, str):
      raise PreconditionViolation(f"prefix must be str, got {type(prefix).__name__}")
    return self._walk_completions(prefix, k)


  def _walk_completions(self, prefix, k):
    if k is not None and k <= 0:
      return

    words = self.words
    plen = len(prefix)
    yielded = 0
    stack = [self.root.first_child] if self.root.first_child is not None else []

    while stack:
      node = stack.pop()
      if node.sibling is not None:
        stack.append(node.sibling)

      rng = node.substr
      stop = min(rng.end + 1, plen)
      if rng.start < stop and words[rng.word_index][rng.start:stop] != prefix[rng.start:stop]:
        continue

      if node.is_word and rng.end + 1 >= plen:
        yield node
        yielded += 1
        if k is not None and yielded >= k:
          return
      if node.first_child is not None:
        stack.append(node.first_child)


  def completions(self, prefix):
    """List of word nodes completing `prefix`; an empty list when none do."""
    return list(self.iter_completions(prefix))


  def complete_words(self, prefix, k=None):
    """Like `iter_completions`, resolved to the stored words."""
    return [self.word_of(node) for node in self.iter_completions(prefix, k=k)]


  def word_of(self, node):
    """Full text of `node`, i.e. the concatenated labels from the root."""
    return reconstruct(self.words, node)


  def search(self, word):
    """Return the node representing exactly `word`, or None."""
    if not isinstance(word, str) or not word:
      return None
    n = len(word)
    node = self.root.first_child
    while node is not None:
      rng = node.substr
      matched = self._match_len(word, rng)
      if matched == 0:
        node = node.sibling
        continue
      if matched < rng.length:
        return None
      if rng.end + 1 == n:
        return node if node.is_word else None
      node = node.first_child
    return None


  def __contains__(self, word):
    return self.search(word) is not None

  def __len__(self):
    """Number of distinct stored words."""
    return self._size

  def __iter__(self):
    return iter(self.complete_words(""))


  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If False, return the total node count (root included).
        If True, return the average out-degree over internal nodes only.

    Returns
    -------
    int | float
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1

      deg = 0
      for child in node._children():
        deg += 1
        stack.append(child)
      if deg > 0:
        total_deg += deg
        internal += 1
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes


  def render(self):
    """Human-readable dump of the tree (debugging aid)."""
    indent = CFG.RENDER_INDENT
    words = self.words
    lines = []
    stack = [(self.root, 1)]
    while stack:
      node, depth = stack.pop()
      pad = indent * (depth - 1)
      if depth > 1:
        lines.append(indent * (depth - 2) + "     |")
      if node.substr is None:
        lines.append(pad + " ---" + CFG.RENDER_ROOT_LABEL)
      else:
        lines.append(pad + "      " + words.prefix_through(node.substr))
        mark = " *" if node.first_child is not None and node.terminal is not None else ""
        lines.append(pad + " ---" + str(node.substr) + mark)
      children = list(node._children())
      for child in reversed(children):
        stack.append((child, depth + 1))
    return "\n".join(lines)


  def _checked_range(self, node):
    """Range of a non-root `node`, or `InvariantViolation` if it is missing or out of bounds."""
    rng = node.substr
    if rng is None:
      raise InvariantViolation(f"non-root node {node!r} has no range")
    try:
      self.words.make_range(*rng)
    except (PreconditionViolation, TypeError) as e:
      raise InvariantViolation(f"bad range on {node!r}: {e}") from e
    return rng


  def _check_children(self, node):
    """Validate the children's ranges and their distinct first characters."""
    words = self.words
    children = list(node._children())
    firsts = []
    for child in children:
      rng = self._checked_range(child)
      firsts.append(words[rng.word_index][rng.start])
    if len(firsts) != len(set(firsts)):
      raise InvariantViolation(f"children of {node!r} share a first character: {firsts}")
    return children


  def check_invariants(self):
    """Walk the tree and raise `InvariantViolation` on the first defect found.

    Checks: the root has no range and no sibling; every other node has a range
    and it is in bounds; each child's label starts right after its parent's
    and agrees with the parent's text; siblings start with distinct
    characters; leaves end at the end of their word; terminal marks name a
    word equal to the node's text; and the number of word nodes matches
    `len(self)`.
    """
    root = self.root
    if root.substr is not None or root.sibling is not None:
      raise InvariantViolation("root must have no range and no sibling")

    words = self.words
    word_nodes = 0
    # (node, text of parent, offset where the node's label must start)
    stack = [(child, "", 0) for child in self._check_children(root)]

    while stack:
      node, parent_text, offset = stack.pop()
      rng = node.substr
      if rng.start != offset:
        raise InvariantViolation(f"{node!r} starts at {rng.start}, expected {offset}")
      text = words.prefix_through(rng)
      if text[:offset] != parent_text:
        raise InvariantViolation(f"{node!r} text {text!r} does not extend {parent_text!r}")

      if node.first_child is None:
        if node.terminal is not None:
          raise InvariantViolation(f"leaf {node!r} carries a terminal mark")
        if rng.end != len(words[rng.word_index]) - 1:
          raise InvariantViolation(f"leaf {node!r} stops before the end of its word")
      elif node.terminal is not None and words[node.terminal] != text:
        raise InvariantViolation(f"terminal mark on {node!r} names {words[node.terminal]!r}")
      if node.is_word:
        word_nodes += 1

      for child in self._check_children(node):
        stack.append((child, text, rng.end + 1))

    if word_nodes != self._size:
      raise InvariantViolation(f"{word_nodes} word nodes but {self._size} words inserted")


# ---------------------------------------------------------------------------
# Functional surface
# ---------------------------------------------------------------------------

def build(words):
  """Build a `CompressedTrie` from `words` (see `CompressedTrie.build`)."""
  return CompressedTrie.build(words)


def completions(trie, words, prefix):
  """Completion nodes for `prefix`; `words` must be the store `trie` was built from."""
  if words is not trie.words and WordStore(words) != trie.words:
    raise PreconditionViolation("completions() called with a different word array than build()")
  return trie.completions(prefix)


def reconstruct(words, node):
  """Resolve a node reference back to its full word."""
  if node.substr is None:
    raise PreconditionViolation("the root does not represent a word")
  return words[node.substr.word_index][:node.substr.end + 1]


def render(trie):
  """Diagnostic tree dump (see `CompressedTrie.render`)."""
  return trie.render()
