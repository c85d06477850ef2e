"""Application services that sequence adapters and core logic."""
