# Services package init
"""
SpotBnB Backend — Services Layer
==================================

Service Inventory:
    - SpotService: spots, spot images and reviews (lookup → ownership → mutation)
"""
