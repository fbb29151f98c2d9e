"""Reader for binary Roblox model and place files."""

__version__ = "0.1.0"