"""
chuk-mcp-harmony - symbolic harmony engine and MCP server.

Chord and Roman numeral parsing, enharmonic spelling, transposition,
key-agnostic progression encoding and voice leading.
"""

__version__ = "0.1.0"
