"""Command-line interface for fastaseek."""
