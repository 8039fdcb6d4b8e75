"""DocShare - personal document vault with owner-controlled sharing."""

__version__ = "0.1.0"
