"""
Shared utilities for stormgr processes.

- logging_config: consistent log setup for the API service and node agents
"""
