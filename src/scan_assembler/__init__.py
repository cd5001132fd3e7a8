"""Assemble scanned page images into a single ordered PDF."""
