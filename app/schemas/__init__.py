"""Pydantic schemas package.

Folder intent:
  common.py   — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  vendor.py   — VendorInput (form data), Vendor (persisted snapshot), EncodedImage
"""
