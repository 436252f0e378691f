"""
Dominion - Deck-building card game engine

A deterministic, rules-driven engine for the base deck-building game.
Games are driven by commands and observed through snapshots:
- Turn phase machine (action, treasure, buy, cleanup)
- Supply and per-player zones
- Card effects as data, resolved step by step with player choices
- Legal action generation for agents
"""

__version__ = "0.1.0"
