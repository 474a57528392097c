"""CA Rewriter - exam-focused current affairs rewriting and quiz engine."""

__version__ = "0.1.0"
