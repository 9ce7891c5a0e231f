# arqap/domains/__init__.py

"""
Business domains of the ARQAP inventory.

- `loc`: shelves and their physical locations (storage cells).
- `art`: artefacts.
- `req`: requesters (researchers, departments, exhibitions).
- `mov`: internal movements and loans, which keep the artefact location
  and availability up to date.
"""
