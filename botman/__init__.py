"""botman: GitHub webhook bot that runs maintenance commands on pull requests."""

__version__ = "0.1.0"
