"""
Infrastructure Layer - External provider clients.
"""
