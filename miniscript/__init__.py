"""Pieces of a MiniScript runtime: keywords and tokens, intrinsics, containers, dates and key input."""

__version__ = "0.1.0"

__all__ = [
    "keywords",
    "dateformat",
    "hashmap",
    "reflist",
    "keyinput",
    "numeric",
    "sequences",
    "intrinsics",
]