"""MCP server exposing Tax Calc tools."""
