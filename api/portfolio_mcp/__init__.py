"""Portfolio MCP server: tool-style queries over bundled project and blog datasets."""

__version__ = "1.0.0"
