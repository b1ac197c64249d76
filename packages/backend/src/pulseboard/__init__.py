"""Pulseboard — project and task tracking with live workspace statistics.

Every write to the workspace recomputes aggregate statistics and pushes
the fresh snapshot to every connected live-view client over a WebSocket.
"""

__version__ = "0.1.0"
