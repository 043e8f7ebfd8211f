"""hookrelay - GitHub webhook to Discord relay."""
__version__ = "0.1.0"
