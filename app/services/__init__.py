"""Services package — all business logic lives here, never in routers.

Files:
  vendor.py         — VendorService, the boundary the HTTP layer calls
  validator.py      — required-field checks before a write
  image_encoder.py  — photo bytes → size-checked data URL (and back)
  search.py         — name/address/phone filter over loaded vendors
  export.py         — JSON export document + download filename

Rule: routers call services, services call the repository, the repository calls the storage gateway.
      No storage calls in routers. No FastAPI imports in services.
"""
