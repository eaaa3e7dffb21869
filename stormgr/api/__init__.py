"""
HTTP API routers.

Endpoints:
- GET /node: node inventory
- GET /mon: live quorum + desired monitors
- GET /pool, POST /pool: storage pools
- POST /image/mapinfo: client access bundle
- GET /metrics: Prometheus exposition
"""
