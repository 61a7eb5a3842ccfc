"""Command line helpers for inspecting route progress offline."""
