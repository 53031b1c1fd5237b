"""
Core utilities shared across the KIP Kuliah API.

Only configuration lives here today; routers, services and stores depend on
these primitives instead of reading the environment themselves.
"""
