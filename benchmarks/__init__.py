"""
Benchmark suite for stackjson.

Compares decoding and encoding speed against the standard library json,
orjson and ujson. Run explicitly with `pytest benchmarks`.
"""
