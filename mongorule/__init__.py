"""mongorule: Ticket store on MongoDB with a clean-slate test fixture."""

__version__ = "0.1.0"

__all__ = ["__version__"]
