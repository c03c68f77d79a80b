"""
Upstream service clients: dialogue backend and parts catalog
"""
