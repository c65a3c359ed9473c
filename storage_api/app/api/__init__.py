"""
API package containing the HTTP routes.

``router`` aggregates one sub‑router per domain and is mounted by
``main`` under the ``/api`` prefix.
"""
