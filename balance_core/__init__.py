# FILE: balance_core/__init__.py
"""
balance_core package: player model, assignment model builder, solver adapter,
solution extraction, fairness reporting, IO and validation.
"""
__all__ = [
    "models",
    "constants",
    "aliases",
    "ratings",
    "fairness",
    "solver_ilp",
    "assignment",
    "balancer",
    "validation",
    "io",
    "config",
    "report",
    "export_pdf",
    "cli",
]
