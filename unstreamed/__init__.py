"""
Shared library code for the unstreamed movie export.

This package is intended to hold code that is reused across:
- the static file server in `api/`
- the export script in `scripts/`

Entrypoints (the FastAPI app, CLI scripts) should live outside this package and
import from `unstreamed` rather than the other way around.
"""
