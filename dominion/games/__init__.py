"""
Games module - Card sets playable on the engine.

Each set has its own subpackage with:
- Card definitions (data only)
- A catalog factory that validates them
- Setup for a new game state
"""
