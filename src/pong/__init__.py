"""pong — a friendlier front end for pacman.

Translates a small intent vocabulary into pacman / pactree invocations
with a strict layered architecture.
"""

from pong.version import __version__

__all__: list[str] = ["__version__"]
