"""Core: configuration, domain, command construction and error classification.

The Core does not print or prompt; front-ends own presentation.
"""
