"""Flet views, one builder per route."""
