"""gitship - release-based git deployments over SSH"""

__version__ = "1.0.0"
