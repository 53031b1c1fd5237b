"""
FastAPI routers grouped by entity (student, discussion).

Each module exposes an APIRouter included by the application factory in
app.py.
"""
