"""
stormgr - Storage cluster control plane

Sits in front of a Ceph cluster and the coordination store.
Responsibilities:
- Node inventory (disks, addresses, location) read from the store
- Desired vs. live monitor quorum
- Replicated and erasure-coded pool reconciliation
- Client access bundles (monitor addresses + secret)
- Cluster metrics registration
"""
