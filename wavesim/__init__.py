"""Array engine, backends, sources and analytical solutions for wave propagation simulations."""

__version__ = "0.1.20"

__all__ = [
    "analytical",
    "array",
    "backend",
    "block",
    "domain_sizing",
    "operations",
    "parallel",
    "sources",
    "sparse",
    "utils",
]