# Routes package init
"""
SpotBnB Backend — API Routes Package
======================================

Route Inventory:
    - spots.py:   /api/spots ...   (spots, spot images, reviews)
    - health.py:  GET /health      (service health check)

Routes are THIN: they declare auth and body validation as dependencies,
call the service, and return its response model. Business logic belongs
in services.
"""
