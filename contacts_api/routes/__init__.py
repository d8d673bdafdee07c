"""
Contacts API — Routes Package
===============================

Route Inventory:
    - contacts.py:  GET/POST /contacts, GET/PUT/DELETE /contacts/{id}
    - users.py:     GET/POST /users,    GET/PUT/DELETE /users/{id}
    - health.py:    GET /health

Routes handle HTTP details only: they read the path and body, call one
service method and pick the success status. Every failure is an application
exception turned into a response by the handlers in ``main.py``.
"""
