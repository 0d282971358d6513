"""Runtime package.

Settings loading, logging setup and relay dependency wiring. Nothing here runs
at import time; callers decide when the environment is read.
"""

__all__: list[str] = []
