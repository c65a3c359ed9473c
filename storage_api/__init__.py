"""
Top‑level package for the Storage API.

This file makes ``storage_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``storage_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
