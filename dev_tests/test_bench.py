import os
import sys
import unittest

# ---------------- Import shim (works from dev_tests/) ----------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

import numpy as np
import pandas as pd

from wordtrie.compressed_trie import build
from wordtrie_bench.bench import COLUMNS, node_depths, run_benchmark, time_build, time_queries


class TestBench(unittest.TestCase):
    def test_run_benchmark_frame(self):
        df = run_benchmark(sizes=(50, 200), p_freq=0.3, seed=1, repeats=1, query_count=10, prefix_len=2)
        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(list(df.columns), COLUMNS)
        self.assertEqual(df["n_words"].tolist(), [50, 200])
        self.assertTrue((df["distinct"] <= df["n_words"]).all())
        self.assertTrue((df["nodes"] > df["distinct"]).all())
        # every query prefix is cut from a stored word
        self.assertTrue((df["hits"] >= 10).all())
        self.assertTrue((df["build_s"] >= 0).all())

    def test_time_build(self):
        seconds, trie = time_build(["bear", "bull", "stock", "bell"], repeats=2)
        self.assertGreaterEqual(seconds, 0.0)
        self.assertEqual(len(trie), 4)
        with self.assertRaises(ValueError):
            time_build(["a"], repeats=0)

    def test_time_queries_counts_hits(self):
        trie = build(["bear", "bull", "stock", "bell"])
        _, hits = time_queries(trie, ["b", "be", "z"], repeats=1)
        self.assertEqual(hits, 5)

    def test_node_depths(self):
        trie = build(["bear", "bull", "stock", "bell"])
        depths = node_depths(trie)
        self.assertIsInstance(depths, np.ndarray)
        self.assertEqual(sorted(depths.tolist()), [1, 2, 3, 3])


if __name__ == "__main__":
    unittest.main(verbosity=2)
