"""MCP server exposing Make.com scenarios, runs and execution logs."""

__version__ = "0.1.0"
