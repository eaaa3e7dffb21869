"""
Ceph administrative access.

- connection: Connection / ConnectionFactory contracts
- restful: production connection over the ceph-mgr restful module
- admin: admin connect with bounded retry
- command, multijson: mon command execution and response decoding
- mon, pool, erasure_code, auth: typed wrappers over individual commands
"""
