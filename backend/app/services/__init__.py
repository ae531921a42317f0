# Services package init
"""
Taskboard Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database.
How:   Each service is a stateless class with a module-level singleton; the
       request's AsyncSession is passed into every call.

Service Inventory:
    - TaskService: per-user task CRUD (ownership enforced on every query)
    - UserService: user CRUD, registration, login and token refresh

Services raise app.exceptions types and never build HTTP responses, so they
can be unit-tested with a mocked session.
"""
