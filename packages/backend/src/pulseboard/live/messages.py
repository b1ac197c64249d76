"""Live channel message types and encoding.

Every server → client message is a JSON object with a "type" field:
- info:  {"type": "info", "message": "..."} — once per new connection
- stats: {"type": "stats", "data": {...}}   — on connect and after every write
"""

import json

from pulseboard.live.stats import StatsSnapshot

INFO = "info"
STATS = "stats"

GREETING = "Connected"


def encode_info(message: str = GREETING) -> str:
    return json.dumps({"type": INFO, "message": message})


def encode_stats(snapshot: StatsSnapshot) -> str:
    return json.dumps({"type": STATS, "data": snapshot.to_wire()})
