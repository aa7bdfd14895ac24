import math
import random
import string

from wordtrie import config as CFG

ALPHABET = string.ascii_lowercase


def _random_word(rng, min_len, max_len):
  n = rng.randint(min_len, max_len)
  return "".join(rng.choice(ALPHABET) for _ in range(n))


def _max_unique(min_len, max_len):
  return sum(len(ALPHABET) ** n for n in range(min_len, max_len + 1))


def generate_random_words(num_words, seed=None, unique=False,
                          min_len=CFG.MIN_WORD_LEN, max_len=CFG.MAX_WORD_LEN):
  """
  Return n random lowercase words.
  - unique=False: duplicates allowed (fast)
  - unique=True: no word repeats (requires n <= number of possible words)
  """
  if min_len < 1 or max_len < min_len:
    raise ValueError(f"invalid word length range [{min_len}, {max_len}]")
  limit = _max_unique(min_len, max_len)
  if num_words < 1 or (unique is True and num_words > limit):
    raise ValueError(f"num_words must be between 1 and {limit}")
  rng = random.Random(seed)
  if not unique:
    return [_random_word(rng, min_len, max_len) for _ in range(num_words)]

  seen = set()
  out = []
  while len(out) < num_words:
    w = _random_word(rng, min_len, max_len)
    if w in seen:
      continue
    seen.add(w)
    out.append(w)
  return out



def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False,
                               min_len=CFG.MIN_WORD_LEN, max_len=CFG.MAX_WORD_LEN):
  """Generates a list of words with a given prefix frequency.
  A higher prefix_freq means more consecutive words share a prefix with the
  word before them, which is what makes a compressed trie split labels.
  Prefix frequency is applied logarithmically
  prefix_freq: 0 -> 0.999...
  """
  def _p_eff_log(x, max_mean=100) -> float:
    # Logarithmic mapping of prefix frequency to effective prefix frequency
    x = max(0.0, min(0.999999, x))
    k = math.log(max_mean)
    p = 1.0 - math.exp(-k * x)
    return min(p, 0.999999)

  if prefix_freq < 0 or prefix_freq >= 1:
    raise ValueError("prefix_freq must be between 0 and 1")
  if min_len < 1 or max_len < min_len:
    raise ValueError(f"invalid word length range [{min_len}, {max_len}]")
  max_unique = _max_unique(min_len, max_len) // 2
  if num_words < 1 or (unique is True and num_words > max_unique):
    raise ValueError(f"num_words must be between 1 and {max_unique}")
  p_eff = _p_eff_log(prefix_freq)
  rng = random.Random(seed)

  rand_words_list = []
  seen = set()

  def _take(word):
    if unique:
      if word in seen:
        return False
      seen.add(word)
    rand_words_list.append(word)
    return True

  while len(rand_words_list) < num_words:
    base = _random_word(rng, min_len, max_len)
    if not _take(base):
      continue

    trigger = rng.random()
    while trigger < p_eff and len(rand_words_list) < num_words:
      # keep a shared stem of the base, grow a fresh tail
      stem = base[:rng.randint(1, max(1, len(base) - 1))]
      tail_len = rng.randint(max(0, min_len - len(stem)), max(0, max_len - len(stem)))
      new_word = stem + "".join(rng.choice(ALPHABET) for _ in range(tail_len))
      _take(new_word)
      trigger = rng.random()
  return rand_words_list
