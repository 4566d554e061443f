"""ASGI dispatch, stage execution, static probing, and serving."""
