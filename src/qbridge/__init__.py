"""qbridge: run the AWS Q Developer CLI as an MCP tool."""

__version__ = "0.1.0"
