"""Live workspace statistics — aggregation, connection registry, broadcast.

Learn: Events flow in one direction:
1. A service writes to the workspace and calls on_workspace_changed()
2. The broadcaster recomputes the statistics snapshot from scratch
3. The snapshot is encoded once and pushed to every live WebSocket

There is one topic (workspace statistics) and nothing is queued or replayed.
A client that misses a message simply gets the next full snapshot.
"""
