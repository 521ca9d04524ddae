"""Logging and other cross-cutting helpers."""
