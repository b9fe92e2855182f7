"""Core building blocks for a small game engine: float formatting, hash sets, locks, logging, files and an entity-component system."""

__version__ = "0.1.0"

__all__ = [
    "atom",
    "ecs",
    "engine",
    "fileio",
    "hashing",
    "hashset",
    "log",
    "memory",
    "multi_vector",
    "option",
    "ryu",
    "sync",
]