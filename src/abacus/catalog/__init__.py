"""Static configuration: the supported-network table and the Counter ABI."""
