# Routes package init
"""
Document Store Gateway — API Routes Package
=============================================

Route Inventory:
    - root.py:         GET /                                  (welcome text)
    - collections.py:  GET/POST /collections/{name}           (list, insert)
                       GET/PUT/DELETE /collections/{name}/{id}

Static files under /Images are mounted directly in main.py.

Routes stay thin: resolve the collection, call CollectionService, return
the result.
"""
