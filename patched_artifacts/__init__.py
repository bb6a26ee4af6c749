"""Decides whether a build can reuse prebuilt, patched react-android artifacts."""
