"""Stock-video search provider implementations.

Available providers:
- ``pexels``: Pexels video search API (free API key, 200 requests/hour)
"""
