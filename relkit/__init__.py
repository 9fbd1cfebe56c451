"""relkit: version propagation and release packaging."""

__version__ = "0.1.0"
