"""Concrete adapters: HTTP download, process execution, clipboard."""
