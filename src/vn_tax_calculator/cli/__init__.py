"""Command line interface for VN Tax Calculator."""
