"""plugpm: install, uninstall and update picgo plugins through npm."""

__version__ = "0.1.0"
