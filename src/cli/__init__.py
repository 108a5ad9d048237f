"""CLI module for the setup tool."""
