"""Deployment diff between a CD environment and an application branch."""

__version__ = "0.1.0"
