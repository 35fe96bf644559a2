# Routes package init
"""
Notes API: Routes Package
============================

Route Inventory:
    - notes.py:   GET/POST /notes, GET/DELETE/PATCH /notes/{id}
    - health.py:  GET /health

Routes are thin: extract the request data, call the service, set the
status code. Statement building and row-count checks live in
services/note_service.py.
"""
