"""Game logic for a top-down horde shooter: monsters, status effects, blood and a pygame window."""

__version__ = "0.1.0"