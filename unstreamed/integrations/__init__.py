"""
External system integrations (TMDb, the source movie list).

External clients should live under this namespace so they remain decoupled
from app entrypoints (`api/`) and scripts (`scripts/`).
"""
