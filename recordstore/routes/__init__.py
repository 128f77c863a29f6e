# Routes package init
"""
RecordStore — API Routes Package
=================================

Route Inventory:
    - records.py: GET/POST/DELETE /api/records, PUT/DELETE /api/records/{id}
    - health.py:  GET /health

Routes stay thin: pull the service from app state, call one operation,
wrap the result in the envelope. Errors are rendered by the handlers in main.py.
"""
