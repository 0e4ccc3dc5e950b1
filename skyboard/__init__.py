"""Skyboard: saved locations and weather lookups over HTTP."""
