from __future__ import annotations
import logging
import os

# render()
RENDER_INDENT: str = "    "
RENDER_ROOT_LABEL: str = "root"

# logging: WORDTRIE_LOG_LEVEL=DEBUG shows per-insert split/branch events
LOG_LEVEL: str = os.environ.get("WORDTRIE_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# synthetic word generator
MIN_WORD_LEN: int = 3
MAX_WORD_LEN: int = 10

# benchmark defaults
DEFAULT_SEED: int = 42
BENCH_SIZES: tuple[int, ...] = (1_000, 5_000, 10_000, 25_000)
BENCH_REPEATS: int = 3
BENCH_QUERY_COUNT: int = 200
BENCH_PREFIX_LEN: int = 2


def configure_logging(verbose: bool = False) -> None:
  """Install a root handler for entry points (library code never does this)."""
  level = logging.INFO if verbose else getattr(logging, LOG_LEVEL, logging.WARNING)
  logging.basicConfig(level=level, format=LOG_FORMAT)
