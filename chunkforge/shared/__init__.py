"""Shared interfaces used across ChunkForge layers."""
