"""
High-level use cases for the KIP Kuliah API.

Each service validates input, calls the FallbackResolver and shapes the
records it gets back. Routers call these services instead of touching the
stores directly.
"""
