"""auth/ -- Authentication package for Postdesk.

Token Service (tokens.py), Access Guard (dependencies.py), and the user
repository (store.py).

Layer rule: auth/ imports only stdlib, third-party libraries, and core/.
It does NOT import from api/, web/, or posts/.
api/ and web/ import from auth/, not the other way around.
"""
