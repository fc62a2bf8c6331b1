"""Data Transfer Objects."""
