"""PhyloWS service core for uBio namebank records."""

__version__ = "0.1.0"
