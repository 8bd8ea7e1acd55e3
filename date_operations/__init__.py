"""
Date Operations - working-day maths, bank holidays, sprint dates and due dates
for MCP clients.
"""

__version__ = "1.0.0"
