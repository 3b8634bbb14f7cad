"""Service layer — discovery logic returning ServiceResult.

Services may import from domain and infrastructure layers.
They must never import from actions, commands, output, or mcp.
"""
