"""pubseq - verify, stage and publish a dependency-ordered set of packages."""

__version__ = "0.1.0"
