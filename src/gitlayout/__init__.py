"""gitlayout: repository layout resolution for git control directories."""

__version__ = "0.1.0"
