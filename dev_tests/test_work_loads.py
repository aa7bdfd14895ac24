import os
import sys
import unittest

# ---------------- Import shim (works from dev_tests/) ----------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from wordtrie_bench.work_loads.en_word_generator import gen_words_with_prefix_freq, generate_random_words
from wordtrie_bench.workload import WorkLoad


# ---------- Helpers for prefix clustering metrics ----------
def neighbor_same_initial_ratio(words):
    """Fraction of positions i>0 where word[i] starts like word[i-1]."""
    if len(words) < 2:
        return 0.0
    same = sum(1 for a, b in zip(words, words[1:]) if a[0] == b[0])
    return same / (len(words) - 1)


# ---------------------------------- Tests ----------------------------------
class TestGenerateRandomWords(unittest.TestCase):
    def test_length_and_types_nonunique(self):
        n = 5_000
        words = generate_random_words(n, seed=123, unique=False)
        self.assertEqual(len(words), n)
        self.assertTrue(all(isinstance(w, str) and w and w == w.lower() for w in words))

    def test_length_bounds(self):
        words = generate_random_words(500, seed=1, min_len=2, max_len=4)
        self.assertTrue(all(2 <= len(w) <= 4 for w in words))

    def test_reproducibility(self):
        a = generate_random_words(2_000, seed=999)
        b = generate_random_words(2_000, seed=999)
        c = generate_random_words(2_000, seed=1000)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)

    def test_uniqueness(self):
        words = generate_random_words(600, seed=42, unique=True, min_len=1, max_len=2)
        self.assertEqual(len(set(words)), 600)

    def test_unique_overflow_raises(self):
        with self.assertRaises(ValueError):
            generate_random_words(27, seed=1, unique=True, min_len=1, max_len=1)

    def test_invalid_arguments_raise(self):
        with self.assertRaises(ValueError):
            generate_random_words(0, seed=1)
        with self.assertRaises(ValueError):
            generate_random_words(10, seed=1, min_len=5, max_len=4)


class TestPrefixFrequencyGenerator(unittest.TestCase):
    def test_basic_length_and_types(self):
        words = gen_words_with_prefix_freq(5_000, prefix_freq=0.0, seed=7)
        self.assertEqual(len(words), 5_000)
        self.assertTrue(all(isinstance(w, str) and w and w == w.lower() for w in words))

    def test_prefix_clustering_effectiveness(self):
        low = gen_words_with_prefix_freq(5_000, prefix_freq=0.0, seed=123)
        high = gen_words_with_prefix_freq(5_000, prefix_freq=0.8, seed=123)
        self.assertGreater(neighbor_same_initial_ratio(high),
                           neighbor_same_initial_ratio(low) + 0.3)

    def test_unique_mode_no_duplicates(self):
        words = gen_words_with_prefix_freq(3_000, prefix_freq=0.5, seed=9, unique=True)
        self.assertEqual(len(words), 3_000)
        self.assertEqual(len(set(words)), 3_000)

    def test_same_seed_reproducibility(self):
        a = gen_words_with_prefix_freq(2_000, prefix_freq=0.5, seed=2024)
        b = gen_words_with_prefix_freq(2_000, prefix_freq=0.5, seed=2024)
        c = gen_words_with_prefix_freq(2_000, prefix_freq=0.5, seed=2025)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)

    def test_invalid_arguments_raise(self):
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(0, prefix_freq=0.3, seed=1)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(10, prefix_freq=1.0, seed=1)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(10, prefix_freq=-0.1, seed=1)


class TestWorkLoad(unittest.TestCase):
    def test_dispatch(self):
        load = WorkLoad(seed=5)
        self.assertEqual(load.words(100), generate_random_words(100, 5, False))
        self.assertEqual(load.words(100, p_freq=0.4), gen_words_with_prefix_freq(100, 0.4, 5, False))

    def test_prefixes(self):
        load = WorkLoad(seed=5)
        words = load.words(200)
        prefixes = load.prefixes(words, 30, 2)
        self.assertEqual(len(prefixes), 30)
        self.assertTrue(all(any(w.startswith(p) for w in words) for p in prefixes))
        self.assertEqual(prefixes, load.prefixes(words, 30, 2))


if __name__ == "__main__":
    unittest.main(verbosity=2)
