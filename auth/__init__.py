"""auth/ -- Credential hashing, session tokens and the access guard for AuthDemo.

Layer rule: auth/ imports only stdlib + third-party libraries.
It does NOT import from api/.
api/ imports from auth/, not the other way around.
"""
