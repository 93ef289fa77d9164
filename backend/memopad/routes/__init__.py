# Routes package init
"""
MemoPad — Routes Package
=========================

Route Inventory:
    - memos.py:  GET /memos, GET/PUT/DELETE /memo/{id}, POST /memo
    - pages.py:  GET / (front end), GET /server-info, GET /<static file>

Routes stay thin: they read the request, call MemoStore, and pick the
response type. Validation rules live in the store and the schemas.
"""
