"""
API Layer - FastAPI routes and middleware.

Routers live in ``makerbench.api.routes``; they are not re-exported here
because the services import the exception types from the middleware.
"""
