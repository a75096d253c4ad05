"""Command line interface modules.

This package provides the command-line tools for:
- Querying and reading traffic counters
- Adding and removing inbound users
- Restarting the server logger
- Generating user identifiers

The command modules wrap ``ServiceClient`` so the control API can be driven
from a shell without writing Python.
"""
