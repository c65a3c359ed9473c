"""
Pydantic schema definitions for API payloads.

Each domain (users, payments) defines its own Pydantic models for
request and response bodies.  Request models keep every field
optional so that the services can report missing input with their
own messages instead of the framework's generic ones.
"""
