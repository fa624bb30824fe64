from __future__ import annotations


class CubeWalkError(Exception):
    pass


class ParseError(CubeWalkError):
    """Malformed board or movement program."""


class ConfigurationError(CubeWalkError):
    """Face adjacency is incomplete, inconsistent, or the net does not fold into a cube."""


class InputTooLargeError(CubeWalkError):
    """Board or program exceeds the configured limits."""
