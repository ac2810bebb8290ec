"""Game domain services: kernels, sessions and tick scheduling.

Each game is a pure state machine in its own module (see ``base``). The
session service persists kernel state and is what HTTP routes and socket
handlers import, keeping transport concerns separated from game rules.
"""
