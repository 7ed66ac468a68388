"""API layer: root router and shared dependencies.

The root router lives in :mod:`expohub.api.router`. Importing it mounts
every feature module, so it is not re-exported here; feature modules
import :mod:`expohub.api.dependencies` and must not trigger discovery.
"""
