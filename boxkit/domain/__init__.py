"""Pure domain utilities: URL paths and API constants.

These modules are free of httpx concerns so they can be unit-tested and
reused by the client, the managers and the CLI.
"""
__all__ = ["paths", "enums"]
