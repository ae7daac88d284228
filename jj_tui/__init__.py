"""Terminal UI for the Jujutsu (jj) version control system."""

__version__ = "0.1.0"
