"""Yummr AI draft service."""
