# Services package init
"""
Document Store Gateway — Services Layer
========================================

What:  Store operations sitting between routes (HTTP) and the driver.

Service Inventory:
    - CollectionService: list / get / insert / update / delete on one
      collection, one driver call each
"""
