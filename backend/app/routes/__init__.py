# Routes package init
"""
Taskboard Backend — API Routes Package
=========================================

Route Inventory:
    - auth.py:    POST /api/auth/register     (create account)
                  POST /api/auth/login        (email + password → tokens)
                  POST /api/auth/refresh      (refresh token → tokens)
                  GET  /api/auth/me           (current user)
    - tasks.py:   GET/POST        /api/tasks
                  GET/PUT/DELETE  /api/tasks/{id}
    - users.py:   GET             /api/users
                  GET/PUT/DELETE  /api/users/{id}
    - health.py:  GET  /health

Routes stay thin: read the request, call a service, pick the success status.
Failures are raised by services and formatted by the handlers in main.py.
"""
