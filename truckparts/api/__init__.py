"""
HTTP routes: chat proxy, health, catalog diagnostics
"""
