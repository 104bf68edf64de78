"""General-purpose building blocks: a hash map, UTF-8 helpers, a JSON writer, a buffer queue and a pool allocator."""

__version__ = "0.1.0"

__all__ = [
    "bqueue",
    "hmap",
    "json_build",
    "pool",
    "utf8_codec",
    "utf8_compare",
    "utf8_search",
]