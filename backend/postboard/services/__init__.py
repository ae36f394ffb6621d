"""
PostBoard Backend — Services Layer
====================================

What:  Business logic between the routes (HTTP) and the database.

Service Inventory:
    - PostService: create, list, update and delete posts
"""
