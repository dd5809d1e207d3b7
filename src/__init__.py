"""kfextract: batch keyframe extraction for video directory trees."""

from kfextract.version import __version__

__all__ = ["__version__"]
