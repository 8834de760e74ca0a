"""Test package for balance_core."""
