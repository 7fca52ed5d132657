"""whatwasthat - find the movie or episode a scene comes from."""

__version__ = "0.1.0"
