"""
PetClinic Backend — Pydantic Request/Response Schemas
=======================================================

What:  The HTTP contract. Request models turn into domain drafts; response
       models are built from domain objects and views.
How:   Schemas never reach below the services: routes convert at the edge
       with `to_draft()` / `from_domain()`.
"""
