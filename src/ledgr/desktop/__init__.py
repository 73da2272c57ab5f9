"""Flet desktop application."""
