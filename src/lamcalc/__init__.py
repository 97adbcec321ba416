"""An interpreter for the untyped and simply-typed lambda calculus."""

__version__ = "0.1.0"
