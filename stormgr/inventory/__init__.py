"""
Node inventory.

- nodes: read model (list_nodes) and per-node writers over the coordination store
- discovery: local disk scan via lsblk
- agent: background reporter that keeps a node's facts and heartbeat current
"""
