"""Delve - grid exploration engine for first-person dungeon crawling.

Resolves player movement against tile semantics and fires declarative
area events (enter/exit/step) as the player crosses named regions.

Usage:
    from delve.storage import AreaMapLoader
    from delve.services import MovementValidator, EventProcessor
"""

__version__ = "0.1.0"
