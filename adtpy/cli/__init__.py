"""Command line interface for adtpy."""
