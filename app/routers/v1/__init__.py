"""v1 router package — all /api/v1/* endpoints live here.

Files:
  vendors.py  — vendor directory CRUD, search, export, photo download
  images.py   — photo upload → data URL

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
