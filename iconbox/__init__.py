"""
iconbox: a small FastAPI service for uploading, listing and serving icons.

Icons are stored as PNG blobs in an object store and indexed by name in a
separate directory store, so third-party apps can discover them through a
JSON manifest.
"""
