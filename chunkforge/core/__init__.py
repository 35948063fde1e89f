"""Core layer: logging, exceptions and configuration shared by every module."""
