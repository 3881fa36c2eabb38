"""
PetClinic Backend — API Routes Package
========================================

Route Inventory (prefix /petclinic/api):
    - owners.py:  /owners, /owners/{owner_id}
    - pets.py:    /owners/{owner_id}/pets, /pets/{pet_id}, /pettypes
    - visits.py:  /pets/{pet_id}/visits, /visits/{visit_id}
    - vets.py:    /vets, /vets/{vet_id}, /specialties
    - health.py:  /health

Routes stay thin: parse the request, call one service method, shape the
response. Error kinds are mapped to status codes by the handlers in main.py.
"""

API_PREFIX = "/petclinic/api"
