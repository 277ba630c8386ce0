"""
Benchmark suite for docjson parsing and writing performance.

Compares docjson against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed, writing speed and memory usage.
"""
