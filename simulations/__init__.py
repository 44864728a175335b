# simulations/__init__.py
"""
Convergence experiments for the quasirandom-rolls repo.

Run the full comparison via:
    python -m simulations.compare [--items N] [--rolls 10 100 ...] [--verbose] [--plot FILE]
"""
