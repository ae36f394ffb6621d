"""
PostBoard Backend — API Routes Package
========================================

Route Inventory:
    - posts.py:  POST   /api/posts         (create)
                 GET    /api/posts         (list, newest first)
                 PUT    /api/posts/{id}    (update)
                 DELETE /api/posts/{id}    (delete)
    - root.py:   GET    /                  (greeting)

Routes handle HTTP concerns only: extract the body or path parameter, call
PostService, and wrap the result in the response envelope. Errors are
turned into envelopes by the handlers registered in main.py.
"""
