"""
Build/query timing benchmark for the range-referencing compressed trie.

`run_benchmark` sweeps workload sizes, builds one trie per size and times both
the build and a batch of prefix queries. Timings are the median over
`repeats` runs (numpy) and the sweep comes back as a pandas DataFrame, ready
for the Streamlit page to chart.
"""
import logging
import time

import numpy as np
import pandas as pd

from wordtrie import config as CFG
from wordtrie.compressed_trie import CompressedTrie
from wordtrie.word_store import WordStore
from wordtrie_bench.workload import WorkLoad

log = logging.getLogger(__name__)

COLUMNS = ["n_words", "distinct", "nodes", "avg_branch", "build_s", "query_s", "hits"]


def time_build(words, repeats=CFG.BENCH_REPEATS):
  """Return (median build seconds, last built trie)."""
  if repeats < 1:
    raise ValueError("repeats must be >= 1")
  store = WordStore(words)
  samples = np.empty(repeats)
  trie = None
  for r in range(repeats):
    t0 = time.perf_counter()
    trie = CompressedTrie.build(store)
    samples[r] = time.perf_counter() - t0
  return float(np.median(samples)), trie


def time_queries(trie, prefixes, repeats=CFG.BENCH_REPEATS):
  """Return (median seconds for the whole prefix batch, total hits)."""
  if repeats < 1:
    raise ValueError("repeats must be >= 1")
  samples = np.empty(repeats)
  hits = 0
  for r in range(repeats):
    hits = 0
    t0 = time.perf_counter()
    for p in prefixes:
      hits += len(trie.completions(p))
    samples[r] = time.perf_counter() - t0
  return float(np.median(samples)), hits


def node_depths(trie):
  """Depth (in nodes below the root) of every word node, as a numpy array."""
  depths = []
  stack = [(child, 1) for child in trie.root._children()]
  while stack:
    node, depth = stack.pop()
    if node.is_word:
      depths.append(depth)
    for child in node._children():
      stack.append((child, depth + 1))
  return np.asarray(depths, dtype=np.int64)


def run_benchmark(sizes=CFG.BENCH_SIZES,
                  p_freq=0.0,
                  seed=CFG.DEFAULT_SEED,
                  repeats=CFG.BENCH_REPEATS,
                  query_count=CFG.BENCH_QUERY_COUNT,
                  prefix_len=CFG.BENCH_PREFIX_LEN):
  """Benchmark build and prefix queries over several workload sizes.

  Parameters
  ----------
  sizes : Iterable[int]
      Number of words per run.
  p_freq : float, default=0.0
      Prefix frequency passed to `WorkLoad.words` (0 = uniform random words).
  seed : int | None
      Seed for the workload and the sampled query prefixes.
  repeats : int
      Timing repetitions; the median is reported.
  query_count, prefix_len : int
      Number of query prefixes and their length.

  Returns
  -------
  pandas.DataFrame
      One row per size with columns `COLUMNS`.
  """
  load = WorkLoad(seed)
  rows = []
  for n in sizes:
    words = load.words(n, p_freq=p_freq)
    build_s, trie = time_build(words, repeats)
    prefixes = load.prefixes(words, query_count, prefix_len)
    query_s, hits = time_queries(trie, prefixes, repeats)
    rows.append({
      "n_words": n,
      "distinct": len(trie),
      "nodes": trie.count_nodes(),
      "avg_branch": trie.count_nodes(get_avg_branch_factor=True),
      "build_s": build_s,
      "query_s": query_s,
      "hits": hits,
    })
    log.info("bench n=%d build=%.4fs query=%.4fs hits=%d", n, build_s, query_s, hits)
  return pd.DataFrame(rows, columns=COLUMNS)
