"""Core: config, console logger, event bus, path helpers."""
