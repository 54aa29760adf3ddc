"""Persistence layer for lifeos."""
