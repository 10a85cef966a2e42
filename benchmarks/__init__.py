"""
Benchmark suite for optjson decoding performance.

Compares optjson against standard JSON libraries on well-formed input:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

and measures optimistic decoding of truncated documents, which the strict
libraries reject.
"""
